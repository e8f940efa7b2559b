"""
import_engine - Animal CSV import pipeline with automatic tagging.

Public API:
    run_import(farm_id, file_content, generator=None) → ImportReport
"""

from import_engine.importer import run_import        # noqa: F401
from import_engine.report import ImportReport        # noqa: F401
