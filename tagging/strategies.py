"""
tagging.strategies - One implementation per numbering system.

Each strategy turns (settings, sequence number, context) into a
candidate tag and knows how to perturb that candidate when it collides.
The orchestrator picks the strategy once per call via strategy_for().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from tagging.barcode import format_barcode
from tagging.models import GenerationContext, TaggingSettings
from tagging.numbering import format_sequential_tag
from tagging.template import resolve


class NumberingStrategy(ABC):
    name: str = ""

    @abstractmethod
    def build(
        self,
        settings: TaggingSettings,
        number: int,
        context: Optional[GenerationContext] = None,
        today: Optional[date] = None,
    ) -> str:
        """Produce the primary candidate for a sequence number."""

    def alternative(
        self,
        settings: TaggingSettings,
        original: str,
        number: int,
        attempt: int,
        context: Optional[GenerationContext] = None,
        today: Optional[date] = None,
    ) -> str:
        """Candidate for retry `attempt` (1-based) after `original` collided."""
        return f"{original}-{attempt}"


class SequentialStrategy(NumberingStrategy):
    name = "sequential"

    def build(self, settings, number, context=None, today=None):
        return format_sequential_tag(settings.prefix, number, settings.sequence_padding)

    def alternative(self, settings, original, number, attempt, context=None, today=None):
        # Offset the number already drawn; the counter is not touched again
        return self.build(settings, number + attempt, context, today)


class CustomFormatStrategy(NumberingStrategy):
    name = "custom"

    def build(self, settings, number, context=None, today=None):
        return resolve(
            settings.format_string,
            number,
            prefix=settings.prefix,
            context=context,
            custom_attributes=settings.custom_attributes,
            today=today,
        )


class BarcodeStrategy(NumberingStrategy):
    name = "barcode"

    def build(self, settings, number, context=None, today=None):
        return format_barcode(
            settings.prefix,
            number,
            settings.barcode_type,
            settings.barcode_length,
            settings.padding_zeros,
            settings.include_check_digit,
        )

    def alternative(self, settings, original, number, attempt, context=None, today=None):
        # A "-n" suffix would break fixed-width symbologies (EAN-13 / UPC-A)
        return self.build(settings, number + attempt, context, today)


_STRATEGIES: dict[str, NumberingStrategy] = {
    s.name: s for s in (SequentialStrategy(), CustomFormatStrategy(), BarcodeStrategy())
}


def strategy_for(numbering_system: str) -> NumberingStrategy:
    """Unknown systems fall back to sequential numbering."""
    return _STRATEGIES.get(numbering_system, _STRATEGIES["sequential"])
