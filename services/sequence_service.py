"""
services.sequence_service - Per-farm tag sequence allocation.

Isolated so the tag generator, the animal API and the import engine
all draw numbers the same way.  A number handed out is consumed for
good, even if the tag built from it is later discarded.
"""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import config
from db.models import TaggingSettingsRecord
from services.settings_service import SettingsService

logger = logging.getLogger(__name__)


class SequenceError(Exception):
    """Raised when the counter could not be advanced."""
    pass


def next_sequence(session: Session, farm_id: str,
                  retries: int = config.SEQUENCE_CAS_RETRIES) -> int:
    """
    Return the farm's current next_number and advance it by one.

    Compare-and-swap: the UPDATE only matches if nobody else moved the
    counter since we read it, so two callers never get the same value.
    The caller commits.  Raises SequenceError after `retries` lost races.
    """
    for _ in range(retries):
        current = session.query(TaggingSettingsRecord.next_number).filter(
            TaggingSettingsRecord.farm_id == farm_id,
        ).scalar()

        if current is None:
            try:
                SettingsService.create_default(session, farm_id, next_number=2)
                session.flush()
                return 1
            except IntegrityError:
                # Another caller created the row first
                session.rollback()
                continue

        result = session.execute(
            update(TaggingSettingsRecord)
            .where(
                TaggingSettingsRecord.farm_id == farm_id,
                TaggingSettingsRecord.next_number == current,
            )
            .values(next_number=current + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return current
        logger.debug(f"Sequence race for farm {farm_id} at {current}, retrying")

    raise SequenceError(f"Could not advance tag sequence for farm {farm_id}")
