"""
services.settings_service - Per-farm tagging settings.

Reads fall back to defaults when a farm has never saved settings.
Updates are validated as a whole and replace the farm's custom
attribute list.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict
from typing import Optional

from sqlalchemy.orm import Session

import config
from db.models import CustomAttributeRecord, TaggingSettingsRecord
from tagging.barcode import validate_barcode_settings
from tagging.models import (
    BARCODE_TYPES,
    METHODS,
    NUMBERING_SYSTEMS,
    CustomAttribute,
    TaggingSettings,
)
from tagging.template import validate_custom_format

PREFIX_RE = re.compile(r"^[A-Z0-9]{1,10}$")

DEFAULT_CUSTOM_ATTRIBUTES = [
    CustomAttribute("Breed Group",
                    ["Holstein-Friesian", "Jersey", "Ayrshire", "Guernsey", "Cross"],
                    sort_order=0),
    CustomAttribute("Production Stage",
                    ["Calf", "Heifer", "Lactating", "Dry"],
                    sort_order=1),
]

# Fields copied verbatim from an update body onto the record
_SCALAR_FIELDS = (
    "method", "numbering_system", "tag_prefix", "custom_format",
    "barcode_type", "barcode_length", "padding_zeros",
    "include_check_digit", "sequence_padding",
)


class SettingsError(Exception):
    """Raised when a settings update is rejected."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def default_settings() -> TaggingSettings:
    return TaggingSettings(
        tag_prefix=config.DEFAULT_TAG_PREFIX,
        custom_attributes=[
            CustomAttribute(a.name, list(a.values), a.required, a.sort_order)
            for a in DEFAULT_CUSTOM_ATTRIBUTES
        ],
    )


def to_settings(record: TaggingSettingsRecord) -> TaggingSettings:
    return TaggingSettings.from_dict(record.to_dict())


def validate_settings(data: dict) -> list[str]:
    """Return every problem with a (merged) settings dict; empty if OK."""
    errors: list[str] = []

    for key in ("tag_prefix", "method", "numbering_system", "custom_format", "barcode_type"):
        if data.get(key) is not None and not isinstance(data[key], str):
            errors.append(f"{key} must be a string")
    if errors:
        return errors

    prefix = data.get("tag_prefix")
    if prefix and not PREFIX_RE.match(prefix):
        errors.append("Tag prefix must be 1-10 uppercase letters or numbers")
    if data.get("method") and data["method"] not in METHODS:
        errors.append(f"Unknown tagging method: {data['method']!r}")
    system = data.get("numbering_system")
    if system and system not in NUMBERING_SYSTEMS:
        errors.append(f"Unknown numbering system: {system!r}")

    for key in ("barcode_length", "sequence_padding"):
        val = data.get(key)
        if val is not None and (not isinstance(val, int) or isinstance(val, bool) or val < 1):
            errors.append(f"{key} must be a positive integer")

    attrs = data.get("custom_attributes") or []
    if not isinstance(attrs, list):
        errors.append("custom_attributes must be a list")
        attrs = []
    elif not all(isinstance(a, dict) for a in attrs):
        errors.append("Each custom attribute must be an object")
        attrs = [a for a in attrs if isinstance(a, dict)]
    for idx, attr in enumerate(attrs, start=1):
        if not str(attr.get("name", "")).strip():
            errors.append(f"Custom attribute {idx}: Name is required")
        values = attr.get("values")
        if not values:
            errors.append(f"Custom attribute {idx}: At least one value is required")
        elif not isinstance(values, list):
            errors.append(f"Custom attribute {idx}: Values must be a list")
        order = attr.get("sort_order")
        if order is not None and (not isinstance(order, int) or isinstance(order, bool)):
            errors.append(f"Custom attribute {idx}: sort_order must be an integer")
    names = [str(a.get("name", "")).strip().lower() for a in attrs]
    if len(names) != len(set(names)):
        errors.append("Custom attribute names must be unique")

    if system == "custom":
        check = validate_custom_format(
            data.get("custom_format") or "",
            [str(a.get("name", "")) for a in attrs],
        )
        errors.extend(check.errors)

    if system == "barcode":
        btype = data.get("barcode_type") or "code128"
        if btype not in BARCODE_TYPES:
            errors.append(f"Unknown barcode type: {btype!r}")
        elif isinstance(data.get("barcode_length"), int):
            check = validate_barcode_settings(btype, data["barcode_length"], prefix or "")
            errors.extend(check.errors)

    return errors


class SettingsService:

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get_record(session: Session, farm_id: str) -> Optional[TaggingSettingsRecord]:
        return session.get(TaggingSettingsRecord, farm_id)

    @staticmethod
    def get(session: Session, farm_id: str) -> TaggingSettings:
        """Settings for a farm, or defaults if none were ever saved."""
        record = SettingsService.get_record(session, farm_id)
        if record is None:
            return default_settings()
        return to_settings(record)

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create_default(session: Session, farm_id: str,
                       next_number: int = 1) -> TaggingSettingsRecord:
        """Add (not commit) a settings row holding the defaults."""
        defaults = default_settings()
        record = TaggingSettingsRecord(
            farm_id=farm_id,
            method=defaults.method,
            numbering_system=defaults.numbering_system,
            tag_prefix=defaults.tag_prefix,
            custom_format=defaults.custom_format,
            barcode_type=defaults.barcode_type,
            barcode_length=defaults.barcode_length,
            padding_zeros=defaults.padding_zeros,
            include_check_digit=defaults.include_check_digit,
            sequence_padding=defaults.sequence_padding,
            next_number=next_number,
        )
        SettingsService._replace_attributes(
            record, [asdict(a) for a in defaults.custom_attributes])
        session.add(record)
        return record

    # ── Update ─────────────────────────────────────────────────────────

    @staticmethod
    def update(session: Session, farm_id: str, data: dict) -> TaggingSettings:
        """
        Merge `data` over the current settings, validate, and save.
        next_number is never written here; the counter only moves forward
        through services.sequence_service.  Raises SettingsError.
        """
        record = SettingsService.get_record(session, farm_id)
        current = record.to_dict() if record is not None else {
            **default_settings().to_dict(), "farm_id": farm_id,
        }
        merged = {**current, **{k: v for k, v in data.items() if k in _SCALAR_FIELDS}}
        if "custom_attributes" in data:
            merged["custom_attributes"] = data["custom_attributes"] or []

        errors = validate_settings(merged)
        if errors:
            raise SettingsError(errors)

        if record is None:
            record = SettingsService.create_default(session, farm_id)
        for key in _SCALAR_FIELDS:
            setattr(record, key, merged[key])
        if "custom_attributes" in data:
            SettingsService._replace_attributes(record, merged["custom_attributes"])

        session.flush()
        return to_settings(record)

    @staticmethod
    def _replace_attributes(record: TaggingSettingsRecord, attrs: list[dict]):
        record.attributes.clear()
        for idx, attr in enumerate(attrs):
            record.attributes.append(CustomAttributeRecord(
                name=str(attr.get("name", "")).strip(),
                values_json=json.dumps(list(attr.get("values") or []), ensure_ascii=False),
                required=bool(attr.get("required", False)),
                sort_order=attr["sort_order"] if attr.get("sort_order") is not None else idx,
            ))
