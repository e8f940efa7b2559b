"""
services - Business-logic layer sitting between API/import and DB.
"""

from services.settings_service import SettingsService, SettingsError   # noqa: F401
from services.animal_service import AnimalService, AnimalError        # noqa: F401
from services.sequence_service import next_sequence                   # noqa: F401
from services.tag_store import SqlTagStore                            # noqa: F401
