"""
tagging.generator - Tag generation with uniqueness retry and fallback.

    Generate → Validate → CheckUnique → Done
                  │            │
                  │            └─ collision → alternatives 1..10
                  │                              └─ all taken → PREFIX-<6 ms digits>
                  └─ any error ───────────────────→ PREFIX-<6 ms digits>
                                                    (PREFIX-<epoch ms> if taken)

The store is a black box providing settings, an atomic counter and an
existence check.  One call costs at most one counter increment.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol

from tagging.errors import GenerationFailure, TaggingError, UniquenessConflict
from tagging.events import GenerationEvents
from tagging.models import (
    DEFAULT_PREFIX,
    GeneratedTag,
    GenerationContext,
    OUTCOME_ALTERNATIVE,
    OUTCOME_FALLBACK,
    OUTCOME_GENERATED,
    OUTCOME_RETRY_EXHAUSTED,
    TaggingSettings,
)
from tagging.strategies import NumberingStrategy, strategy_for
from tagging.validator import ensure_valid, validate_generated_tag

logger = logging.getLogger(__name__)

MAX_ALTERNATIVE_ATTEMPTS = 10
FALLBACK_DIGITS = 6


class TagStore(Protocol):
    """Operations the surrounding application must provide."""

    def get_tagging_settings(self, farm_id: str) -> TaggingSettings: ...

    def increment_sequence(self, farm_id: str) -> int: ...

    def tag_exists(self, farm_id: str, tag_number: str) -> bool: ...


class TagGenerator:
    """
    Orchestrates candidate generation for one farm at a time.

    Parameters
    ----------
    store : TagStore implementation
    events : GenerationEvents used to report each outcome
    clock : callable returning the current datetime (dates in templates,
            epoch millis for fallback tags)
    max_attempts : alternatives tried after the first collision
    """

    def __init__(
        self,
        store: TagStore,
        *,
        events: Optional[GenerationEvents] = None,
        clock: Optional[Callable[[], datetime]] = None,
        max_attempts: int = MAX_ALTERNATIVE_ATTEMPTS,
    ):
        self.store = store
        self.events = events or GenerationEvents()
        self._clock = clock or datetime.now
        self.max_attempts = max_attempts

    # ── Public API ─────────────────────────────────────────────────────

    def generate_tag_number(self, farm_id: str,
                            context: Optional[GenerationContext] = None) -> str:
        """Return a tag number; never raises."""
        return self.generate_tag(farm_id, context).tag_number

    def generate_tag(self, farm_id: str,
                     context: Optional[GenerationContext] = None) -> GeneratedTag:
        settings: Optional[TaggingSettings] = None
        method = "unknown"
        try:
            settings = self.store.get_tagging_settings(farm_id)
            if settings is None:
                raise GenerationFailure(f"No tagging settings for farm {farm_id}")

            strategy = strategy_for(settings.numbering_system)
            method = strategy.name
            today = self._clock().date()

            number = self.store.increment_sequence(farm_id)
            candidate = ensure_valid(strategy.build(settings, number, context, today), settings)

            try:
                self._check_unique(farm_id, candidate)
            except UniquenessConflict:
                self.events.collision(method, farm_id, candidate, 0)
                return self._retry(farm_id, settings, strategy, candidate, number, context)

            self.events.outcome(method, farm_id, OUTCOME_GENERATED, candidate)
            return GeneratedTag(candidate, OUTCOME_GENERATED, sequence_number=number)

        except Exception as exc:
            if isinstance(exc, TaggingError):
                failure = exc
            else:
                failure = GenerationFailure(f"{type(exc).__name__}: {exc}")
                failure.__cause__ = exc
            prefix = settings.prefix if settings is not None else DEFAULT_PREFIX
            tag = self._global_fallback(farm_id, prefix)
            self.events.outcome(method, farm_id, OUTCOME_FALLBACK, tag, error=failure)
            return GeneratedTag(
                tag,
                OUTCOME_FALLBACK,
                errors=validate_generated_tag(tag, TaggingSettings()).errors,
                reason=str(failure),
            )

    # ── Internals ─────────────────────────────────────────────────────

    def _check_unique(self, farm_id: str, tag: str) -> None:
        if self.store.tag_exists(farm_id, tag):
            raise UniquenessConflict(tag)

    def _retry(
        self,
        farm_id: str,
        settings: TaggingSettings,
        strategy: NumberingStrategy,
        original: str,
        number: int,
        context: Optional[GenerationContext],
    ) -> GeneratedTag:
        today = self._clock().date()
        for attempt in range(1, self.max_attempts + 1):
            alt = strategy.alternative(settings, original, number, attempt, context, today)
            ensure_valid(alt, settings)
            try:
                self._check_unique(farm_id, alt)
            except UniquenessConflict:
                self.events.collision(strategy.name, farm_id, alt, attempt)
                continue
            self.events.outcome(strategy.name, farm_id, OUTCOME_ALTERNATIVE, alt, attempt)
            return GeneratedTag(alt, OUTCOME_ALTERNATIVE, attempts=attempt,
                                sequence_number=number)

        # Not re-checked for uniqueness
        tag = f"{settings.prefix}-{self._millis()[-FALLBACK_DIGITS:]}"
        self.events.outcome(strategy.name, farm_id, OUTCOME_RETRY_EXHAUSTED, tag,
                            self.max_attempts)
        return GeneratedTag(
            tag,
            OUTCOME_RETRY_EXHAUSTED,
            errors=validate_generated_tag(tag, TaggingSettings()).errors,
            attempts=self.max_attempts,
            sequence_number=number,
            reason=f"{self.max_attempts} alternatives to {original} already in use",
        )

    def _global_fallback(self, farm_id: str, prefix: str) -> str:
        millis = self._millis()
        tag = f"{prefix}-{millis[-FALLBACK_DIGITS:]}"
        try:
            if not self.store.tag_exists(farm_id, tag):
                return tag
        except Exception as exc:
            logger.warning(f"Fallback uniqueness check failed for farm {farm_id}: {exc}")
            return tag
        return f"{prefix}-{millis}"

    def _millis(self) -> str:
        return str(int(self._clock().timestamp() * 1000))
