"""
tagging.validator - Structural and symbology checks on tag candidates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from tagging.barcode import CODE39_RE
from tagging.errors import ValidationError
from tagging.models import TaggingSettings

MAX_TAG_LENGTH = 50
TAG_CHARSET_RE = re.compile(r"^[A-Za-z0-9_-]+$")
EAN13_RE = re.compile(r"^\d{13}$")
UPC_RE = re.compile(r"^\d{12}$")


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": self.errors}


def validate_generated_tag(tag: str, settings: TaggingSettings) -> ValidationResult:
    result = ValidationResult()
    errors = result.errors

    if not tag or not tag.strip():
        errors.append("Tag number cannot be empty")
    if len(tag) > MAX_TAG_LENGTH:
        errors.append(f"Tag number exceeds maximum length ({MAX_TAG_LENGTH} characters)")
    if not TAG_CHARSET_RE.match(tag):
        errors.append("Tag number contains invalid characters")

    if settings.numbering_system == "barcode":
        if settings.barcode_type == "ean13" and not EAN13_RE.match(tag):
            errors.append("EAN-13 barcode must be exactly 13 digits")
        elif settings.barcode_type == "upc" and not UPC_RE.match(tag):
            errors.append("UPC barcode must be exactly 12 digits")
        elif settings.barcode_type == "code39" and not CODE39_RE.match(tag):
            errors.append("Code 39 barcode contains invalid characters")

    return result


def ensure_valid(tag: str, settings: TaggingSettings) -> str:
    """Return tag unchanged, or raise ValidationError."""
    result = validate_generated_tag(tag, settings)
    if not result.is_valid:
        raise ValidationError(tag, result.errors)
    return tag


def validate_tag_number(tag: str) -> ValidationResult:
    """Checks applied to a tag number typed in by a user."""
    result = ValidationResult()
    errors = result.errors
    tag = tag or ""

    if not tag.strip():
        errors.append("Tag number is required")
    if len(tag) > MAX_TAG_LENGTH:
        errors.append(f"Tag number cannot exceed {MAX_TAG_LENGTH} characters")
    if not TAG_CHARSET_RE.match(tag):
        errors.append("Tag number can only contain letters, numbers, hyphens, and underscores")
    if tag.startswith("-") or tag.endswith("-"):
        errors.append("Tag number cannot start or end with a hyphen")
    if "--" in tag:
        errors.append("Tag number cannot contain consecutive hyphens")

    return result
