"""
tagging.events - Structured logging of generation outcomes.

The generator reports through a single GenerationEvents object instead
of logging inline.  Each record carries method, farm_id and outcome as
`extra` fields so log handlers can index them.
"""

from __future__ import annotations

import logging
from typing import Optional

from tagging.models import (
    OUTCOME_ALTERNATIVE,
    OUTCOME_FALLBACK,
    OUTCOME_GENERATED,
    OUTCOME_RETRY_EXHAUSTED,
)

logger = logging.getLogger(__name__)

_LEVELS = {
    OUTCOME_GENERATED: logging.INFO,
    OUTCOME_ALTERNATIVE: logging.WARNING,
    OUTCOME_RETRY_EXHAUSTED: logging.WARNING,
    OUTCOME_FALLBACK: logging.ERROR,
}


class GenerationEvents:

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger

    def outcome(
        self,
        method: str,
        farm_id: str,
        outcome: str,
        tag_number: str,
        attempts: int = 0,
        error: Optional[BaseException] = None,
    ) -> None:
        level = _LEVELS.get(outcome, logging.INFO)
        fields = {
            "method": method,
            "farm_id": farm_id,
            "outcome": outcome,
            "tag_number": tag_number,
            "attempts": attempts,
        }
        msg = f"tag {outcome}: farm={farm_id} method={method} tag={tag_number} attempts={attempts}"
        if error is not None:
            msg += f" error={error}"
        self._log.log(level, msg, extra={"tagging": fields}, exc_info=error)

    def collision(self, method: str, farm_id: str, tag_number: str, attempt: int) -> None:
        self._log.debug(
            f"tag collision: farm={farm_id} method={method} tag={tag_number} attempt={attempt}",
            extra={"tagging": {
                "method": method, "farm_id": farm_id,
                "outcome": "collision", "tag_number": tag_number, "attempts": attempt,
            }},
        )


class RecordingEvents(GenerationEvents):
    """Keeps every outcome in memory; used by tests and batch callers."""

    def __init__(self, log: Optional[logging.Logger] = None):
        super().__init__(log)
        self.records: list[dict] = []

    def outcome(self, method, farm_id, outcome, tag_number, attempts=0, error=None):
        self.records.append({
            "method": method,
            "farm_id": farm_id,
            "outcome": outcome,
            "tag_number": tag_number,
            "attempts": attempts,
            "error": error,
        })
        super().outcome(method, farm_id, outcome, tag_number, attempts, error)
