"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → row_processor → DB commit and produces
a structured ImportReport.
"""

from __future__ import annotations

import logging
from typing import Optional

from db.engine import get_session
from import_engine.csv_parser import prepare_reader
from import_engine.row_processor import RowProcessor, RowError
from import_engine.report import ImportReport
from services.tag_store import SqlTagStore
from tagging.generator import TagGenerator

logger = logging.getLogger(__name__)


def run_import(
    farm_id: str,
    file_content: str | bytes,
    *,
    generator: Optional[TagGenerator] = None,
) -> ImportReport:
    """
    Import a CSV of animals for one farm.

    Parameters
    ----------
    farm_id : farm receiving the animals
    file_content : raw CSV (bytes or str)
    generator : TagGenerator for rows without a tag (SQL-backed by default)

    Each row is committed on its own: generated tags draw their sequence
    numbers in separate short transactions, and a row must be visible to
    the uniqueness check of the rows after it.
    """
    report = ImportReport()
    reader = prepare_reader(file_content)
    if reader is None:
        report.add_error(0, "CSV has no header row or is empty")
        return report

    session = get_session()
    processor = RowProcessor(farm_id, generator or TagGenerator(SqlTagStore()))

    try:
        for row_idx, row in enumerate(reader, start=2):   # row 1 = header
            report.total_rows += 1
            try:
                animal = processor.process(session, row)
                session.add(animal)
                session.commit()
                report.imported += 1
                if processor.last_generated is not None:
                    report.add_generated(row_idx, animal.tag_number,
                                         processor.last_generated.outcome)
            except RowError as exc:
                session.rollback()
                report.add_error(row_idx, str(exc))
            except Exception as exc:
                session.rollback()
                logger.exception(f"Unexpected error importing row {row_idx} for farm {farm_id}")
                report.add_error(row_idx, f"Unexpected: {exc}")
    finally:
        session.close()

    logger.info(f"Import for farm {farm_id}: {report.imported} imported, "
                f"{report.skipped} skipped / {report.total_rows} rows")
    return report
