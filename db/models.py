"""
db.models - SQLAlchemy ORM declarations.

Tables
------
tagging_settings   - one row per farm.  next_number doubles as the farm's
                     sequence counter and is only advanced through
                     services.sequence_service.
custom_attributes  - farm-defined attributes usable as format placeholders.
                     Allowed values are stored as a JSON list.
animals            - minimal animal record; the engine only needs
                     (farm_id, tag_number, status) for uniqueness checks.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, Text, ForeignKey, Index,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _now():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class TaggingSettingsRecord(Base):
    __tablename__ = "tagging_settings"

    farm_id = Column(String(64), primary_key=True)

    # ── Strategy selection ─────────────────────────────────────────────
    method           = Column(String(20), nullable=False, default="basic")
    numbering_system = Column(String(20), nullable=False, default="sequential")
    tag_prefix       = Column(String(20), nullable=False, default="COW")

    # ── Per-strategy options ───────────────────────────────────────────
    custom_format       = Column(String(100), default="{PREFIX}-{NUMBER:3}")
    barcode_type        = Column(String(10), default="code128")
    barcode_length      = Column(Integer, default=8)
    padding_zeros       = Column(Boolean, default=True)
    include_check_digit = Column(Boolean, default=False)
    sequence_padding    = Column(Integer, default=3)

    # ── Counter ────────────────────────────────────────────────────────
    next_number = Column(Integer, nullable=False, default=1)

    updated_at = Column(DateTime, default=_now, onupdate=_now)

    attributes = relationship(
        "CustomAttributeRecord", back_populates="settings",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="CustomAttributeRecord.sort_order",
    )

    def to_dict(self) -> dict:
        return {
            "farm_id": self.farm_id,
            "method": self.method,
            "numbering_system": self.numbering_system,
            "tag_prefix": self.tag_prefix,
            "custom_format": self.custom_format or "",
            "barcode_type": self.barcode_type,
            "barcode_length": self.barcode_length,
            "padding_zeros": self.padding_zeros,
            "include_check_digit": self.include_check_digit,
            "sequence_padding": self.sequence_padding,
            "next_number": self.next_number,
            "custom_attributes": [a.to_dict() for a in self.attributes],
        }


class CustomAttributeRecord(Base):
    __tablename__ = "custom_attributes"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    farm_id     = Column(String(64),
                         ForeignKey("tagging_settings.farm_id", ondelete="CASCADE"),
                         nullable=False, index=True)
    name        = Column(String(100), nullable=False)
    values_json = Column(Text, nullable=False, default="[]")
    required    = Column(Boolean, default=False)
    sort_order  = Column(Integer, default=0)

    settings = relationship("TaggingSettingsRecord", back_populates="attributes")

    @property
    def values(self) -> list[str]:
        try:
            return list(json.loads(self.values_json or "[]"))
        except ValueError:
            return []

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "values": self.values,
            "required": bool(self.required),
            "sort_order": self.sort_order or 0,
        }


class Animal(Base):
    __tablename__ = "animals"

    id                = Column(String(36), primary_key=True,
                               default=lambda: str(uuid.uuid4()))
    farm_id           = Column(String(64), nullable=False, index=True)
    tag_number        = Column(String(50), nullable=False)
    name              = Column(String(100), default="")
    breed             = Column(String(50), default="")
    gender            = Column(String(10), nullable=False)
    production_status = Column(String(30), default="")
    animal_source     = Column(String(30), default="newborn_calf")
    birth_date        = Column(String(10), default="")          # YYYY-MM-DD
    mother_id         = Column(String(36), nullable=True)
    father_id         = Column(String(36), nullable=True)
    status            = Column(String(20), nullable=False, default="active")
    notes             = Column(Text, default="")

    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    __table_args__ = (
        Index("ix_farm_tag", "farm_id", "tag_number"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "farm_id": self.farm_id,
            "tag_number": self.tag_number,
            "name": self.name or "",
            "breed": self.breed or "",
            "gender": self.gender,
            "production_status": self.production_status or "",
            "animal_source": self.animal_source or "",
            "birth_date": self.birth_date or "",
            "mother_id": self.mother_id,
            "father_id": self.father_id,
            "status": self.status,
            "notes": self.notes or "",
            "created_at": self.created_at.isoformat() if self.created_at else "",
        }
