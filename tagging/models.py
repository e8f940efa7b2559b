"""
tagging.models - Value types shared by the tag generation engine.

TaggingSettings is owned by the surrounding application (one row per
farm); the engine only reads it.  GenerationContext carries whatever is
known about the animal being tagged.  GeneratedTag is the transient
result handed back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Optional

# ── Enumerations ──────────────────────────────────────────────────────
METHODS = ("basic", "structured", "automated")
NUMBERING_SYSTEMS = ("sequential", "custom", "barcode")
BARCODE_TYPES = ("code128", "code39", "ean13", "upc")
ANIMAL_SOURCES = ("newborn_calf", "purchased_animal")

# ── Defaults ──────────────────────────────────────────────────────────
DEFAULT_PREFIX = "COW"
DEFAULT_CUSTOM_FORMAT = "{PREFIX}-{NUMBER:3}"
DEFAULT_BARCODE_TYPE = "code128"
DEFAULT_BARCODE_LENGTH = 8
DEFAULT_SEQUENCE_PADDING = 3

# Outcomes reported on GeneratedTag / generation events
OUTCOME_GENERATED = "generated"
OUTCOME_ALTERNATIVE = "alternative"
OUTCOME_RETRY_EXHAUSTED = "retry_exhausted"
OUTCOME_FALLBACK = "fallback"


# ── Body parsing ──────────────────────────────────────────────────────
# from_dict() raises ValueError on structurally wrong input so API
# callers can answer 400.

def _mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object")
    return data


def _items(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list")
    return value


def _int(value: Any, default: int, what: str) -> int:
    if not value:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be an integer") from None


@dataclass
class CustomAttribute:
    """A farm-defined attribute with its list of allowed values."""
    name: str
    values: list[str] = field(default_factory=list)
    required: bool = False
    sort_order: int = 0

    @property
    def placeholder(self) -> str:
        """Token name used in custom formats: 'Breed Group' → BREED_GROUP."""
        return "_".join(self.name.upper().split())

    @classmethod
    def from_dict(cls, data: dict) -> "CustomAttribute":
        data = _mapping(data, "custom attribute")
        return cls(
            name=str(data.get("name", "")).strip(),
            values=[str(v) for v in _items(data.get("values"), "custom attribute values")],
            required=bool(data.get("required", False)),
            sort_order=_int(data.get("sort_order"), 0, "sort_order"),
        )


@dataclass
class AttributeValue:
    """A concrete value supplied for one custom attribute at generation time."""
    name: str
    value: str

    @classmethod
    def from_dict(cls, data: dict) -> "AttributeValue":
        data = _mapping(data, "attribute value")
        return cls(name=str(data.get("name", "")), value=str(data.get("value", "") or ""))


@dataclass
class TaggingSettings:
    method: str = "basic"
    numbering_system: str = "sequential"
    tag_prefix: str = DEFAULT_PREFIX
    custom_format: str = DEFAULT_CUSTOM_FORMAT
    barcode_type: str = DEFAULT_BARCODE_TYPE
    barcode_length: int = DEFAULT_BARCODE_LENGTH
    padding_zeros: bool = True
    include_check_digit: bool = False
    next_number: int = 1
    sequence_padding: int = DEFAULT_SEQUENCE_PADDING
    custom_attributes: list[CustomAttribute] = field(default_factory=list)

    @property
    def prefix(self) -> str:
        """Configured prefix, or the default when blank."""
        return self.tag_prefix or DEFAULT_PREFIX

    @property
    def format_string(self) -> str:
        return self.custom_format or DEFAULT_CUSTOM_FORMAT

    @classmethod
    def from_dict(cls, data: dict) -> "TaggingSettings":
        """
        Build settings from a plain dict (API body or DB row dump).
        Missing / falsy keys fall back to the documented defaults.
        Raises ValueError on wrongly typed values.
        """
        data = _mapping(data, "settings")
        padding = data.get("padding_zeros")
        return cls(
            method=str(data.get("method") or "basic"),
            numbering_system=str(data.get("numbering_system") or "sequential"),
            tag_prefix=str(data.get("tag_prefix") or DEFAULT_PREFIX),
            custom_format=str(data.get("custom_format") or DEFAULT_CUSTOM_FORMAT),
            barcode_type=str(data.get("barcode_type") or DEFAULT_BARCODE_TYPE),
            barcode_length=_int(data.get("barcode_length"), DEFAULT_BARCODE_LENGTH, "barcode_length"),
            padding_zeros=True if padding is None else bool(padding),
            include_check_digit=bool(data.get("include_check_digit", False)),
            next_number=_int(data.get("next_number"), 1, "next_number"),
            sequence_padding=_int(data.get("sequence_padding"), DEFAULT_SEQUENCE_PADDING,
                                  "sequence_padding"),
            custom_attributes=[
                CustomAttribute.from_dict(a)
                for a in _items(data.get("custom_attributes"), "custom_attributes")
            ],
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GenerationContext:
    animal_source: str = "newborn_calf"
    animal_data: dict[str, Any] = field(default_factory=dict)
    custom_attributes: list[AttributeValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["GenerationContext"]:
        if not data:
            return None
        data = _mapping(data, "context")
        return cls(
            animal_source=str(data.get("animal_source") or "newborn_calf"),
            animal_data=dict(_mapping(data.get("animal_data") or {}, "animal_data")),
            custom_attributes=[
                AttributeValue.from_dict(a)
                for a in _items(data.get("custom_attributes"), "custom_attributes")
            ],
        )


@dataclass
class GeneratedTag:
    tag_number: str
    outcome: str = OUTCOME_GENERATED
    errors: list[str] = field(default_factory=list)
    attempts: int = 0
    sequence_number: Optional[int] = None
    reason: Optional[str] = None     # why a fallback was used

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def is_fallback(self) -> bool:
        return self.outcome in (OUTCOME_FALLBACK, OUTCOME_RETRY_EXHAUSTED)

    def to_dict(self) -> dict:
        return {
            "tag_number": self.tag_number,
            "outcome": self.outcome,
            "is_valid": self.is_valid,
            "errors": self.errors,
            "attempts": self.attempts,
            "sequence_number": self.sequence_number,
            "reason": self.reason,
        }
