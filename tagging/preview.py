"""
tagging.preview - Side-effect-free tag previews.

Uses the same strategies as the generator but never touches a store:
no counter increment, no uniqueness check.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from tagging.models import GenerationContext, TaggingSettings
from tagging.numbering import format_sequential_tag
from tagging.strategies import strategy_for

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_COUNT = 3


def preview_tag_number(
    settings: TaggingSettings,
    context: Optional[GenerationContext] = None,
    number: int = 1,
    today: Optional[date] = None,
) -> str:
    """What the tag for `number` would look like under `settings`."""
    try:
        strategy = strategy_for(settings.numbering_system)
        return strategy.build(settings, number, context, today or date.today())
    except Exception as exc:
        logger.warning(f"Preview failed for number {number}: {exc}")
        return format_sequential_tag(settings.prefix, number)


def preview_tag_numbers(
    settings: TaggingSettings,
    context: Optional[GenerationContext] = None,
    starting_number: Optional[int] = None,
    count: int = DEFAULT_PREVIEW_COUNT,
    today: Optional[date] = None,
) -> list[str]:
    """
    Preview `count` consecutive tags.  starting_number defaults to the
    advisory next_number cached on the settings.
    """
    start = settings.next_number if starting_number is None else starting_number
    today = today or date.today()
    return [preview_tag_number(settings, context, start + i, today) for i in range(max(0, count))]
