"""
tagging.numbering - Sequential tag construction and parsing.

Format:  PREFIX-NNN
         NNN = sequence number zero-padded to the configured width (3).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from tagging.barcode import format_barcode
from tagging.models import DEFAULT_PREFIX, DEFAULT_SEQUENCE_PADDING
from tagging.template import resolve

_TAG_PATTERNS = (
    re.compile(r"^([A-Za-z]+)-(\d+)$"),     # PREFIX-123
    re.compile(r"^([A-Za-z]+)(\d+)$"),      # PREFIX123
    re.compile(r"^([A-Za-z]+)_(\d+)$"),     # PREFIX_123
)

ALTERNATIVE_PREFIXES = ("COW", "ANIMAL", "TAG")


@dataclass
class ParsedTag:
    prefix: str
    number: int
    original: str


def format_sequential_tag(prefix: str, number: int,
                          padding: int = DEFAULT_SEQUENCE_PADDING) -> str:
    """Assemble 'PREFIX-NNN'."""
    return f"{prefix}-{str(number).zfill(padding)}"


def parse_tag_number(tag: str) -> ParsedTag:
    """
    Split a tag into prefix + number.  Tags matching none of the known
    shapes come back whole as the prefix with number 0.
    """
    for pattern in _TAG_PATTERNS:
        m = pattern.match(tag)
        if m:
            return ParsedTag(m.group(1), int(m.group(2)), tag)
    return ParsedTag(tag, 0, tag)


def suggest_alternative_tags(desired: str, existing: Iterable[str], count: int = 5) -> list[str]:
    """
    Propose up to `count` free tags near `desired`: first by bumping the
    number, then by swapping in a stock prefix.
    """
    taken = {t.upper() for t in existing}
    parsed = parse_tag_number(desired)
    suggestions: list[str] = []

    for i in range(1, count * 2 + 1):
        if len(suggestions) >= count:
            break
        candidate = format_sequential_tag(parsed.prefix, parsed.number + i)
        if candidate.upper() not in taken:
            suggestions.append(candidate)

    for prefix in ALTERNATIVE_PREFIXES:
        if len(suggestions) >= count:
            break
        if prefix == parsed.prefix.upper():
            continue
        candidate = format_sequential_tag(prefix, parsed.number)
        if candidate.upper() not in taken:
            suggestions.append(candidate)

    return suggestions


def convert_tag_format(tag: str, numbering_system: str) -> str:
    """Re-express an existing tag in another numbering system's default shape."""
    parsed = parse_tag_number(tag)
    prefix = parsed.prefix or DEFAULT_PREFIX
    if numbering_system == "sequential":
        return format_sequential_tag(prefix, parsed.number)
    if numbering_system == "barcode":
        return format_barcode(prefix, parsed.number, "code128", len(prefix) + 6)
    if numbering_system == "custom":
        return resolve("{PREFIX}-{NUMBER}", parsed.number, prefix=prefix)
    return tag
