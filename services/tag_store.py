"""
services.tag_store - SQL implementation of tagging.generator.TagStore.

Every operation runs in its own short session so the generator never
holds a connection between calls, and a drawn sequence number is
committed before the candidate built from it is checked.
"""

from __future__ import annotations

from db.engine import session_scope
from services.animal_service import AnimalService
from services.sequence_service import next_sequence
from services.settings_service import SettingsService
from tagging.models import TaggingSettings


class SqlTagStore:

    def get_tagging_settings(self, farm_id: str) -> TaggingSettings:
        with session_scope() as session:
            return SettingsService.get(session, farm_id)

    def increment_sequence(self, farm_id: str) -> int:
        with session_scope() as session:
            return next_sequence(session, farm_id)

    def tag_exists(self, farm_id: str, tag_number: str) -> bool:
        with session_scope() as session:
            return AnimalService.tag_exists(session, farm_id, tag_number)
