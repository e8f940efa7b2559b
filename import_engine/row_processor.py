"""
import_engine.row_processor - Validate and transform one CSV row into an Animal.

Single-responsibility: given a dict-row and a session, either return
an Animal ready to be added, or raise RowError.  Rows without a tag
number get one from the tag generator.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from db.models import Animal
from import_engine.field_map import (
    DIRECT_FIELDS,
    KNOWN_COLUMNS,
    PARENT_COLUMNS,
    SOURCE_ALIASES,
)
from services.animal_service import GENDERS, AnimalService, context_from_animal
from tagging.generator import TagGenerator
from tagging.models import GeneratedTag
from tagging.validator import validate_tag_number


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


class RowProcessor:
    """
    Turns rows into Animals for one farm.  Rows are committed one by one,
    so a tag repeated later in the same file is caught by the database
    check.  last_generated holds the GeneratedTag of the latest row, if any.
    """

    def __init__(self, farm_id: str, generator: TagGenerator):
        self.farm_id = farm_id
        self.generator = generator
        self.last_generated: Optional[GeneratedTag] = None

    def process(self, session: Session, row: dict) -> Animal:
        """
        Validate one row, resolve its tag and parents, build an Animal.
        Raises RowError on any problem.
        """
        self.last_generated = None
        data = self._map_row(row)

        gender = (data.get("gender") or "").lower()
        if gender in ("f", "m"):
            gender = "female" if gender == "f" else "male"
        if gender not in GENDERS:
            raise RowError(f"Missing or invalid gender: {data.get('gender')!r}")
        data["gender"] = gender

        self._resolve_parents(session, data)
        tag_number = self._resolve_tag(session, data)

        animal = Animal(farm_id=self.farm_id, tag_number=tag_number)
        for attr in set(DIRECT_FIELDS.values()) - {"tag_number"}:
            if data.get(attr):
                setattr(animal, attr, data[attr])
        for attr in set(PARENT_COLUMNS.values()):
            if data.get(attr):
                setattr(animal, attr, data[attr])

        return animal

    # ── Private helpers ────────────────────────────────────────────────

    def _map_row(self, row: dict) -> dict:
        """Normalised row → animal body understood by the services."""
        data: dict = {}
        extra: list[dict] = []
        for col, raw in row.items():
            if col is None:
                continue
            val = (raw or "").strip()
            if not val:
                continue
            if col in DIRECT_FIELDS:
                data.setdefault(DIRECT_FIELDS[col], val)
            elif col not in KNOWN_COLUMNS:
                extra.append({"name": col.replace("_", " "), "value": val})

        source = (data.get("animal_source") or "").lower()
        data["animal_source"] = SOURCE_ALIASES.get(source, source or "newborn_calf")
        if extra:
            data["custom_attributes"] = extra
        data["_parents"] = {
            PARENT_COLUMNS[c]: (row.get(c) or "").strip()
            for c in PARENT_COLUMNS if (row.get(c) or "").strip()
        }
        return data

    def _resolve_tag(self, session: Session, data: dict) -> str:
        tag_number = data.get("tag_number", "")

        if not tag_number:
            generated = self.generator.generate_tag(self.farm_id, context_from_animal(data))
            self.last_generated = generated
            tag_number = generated.tag_number
        else:
            check = validate_tag_number(tag_number)
            if not check.is_valid:
                raise RowError(f"Invalid tag {tag_number!r}: {', '.join(check.errors)}")

        if AnimalService.tag_exists(session, self.farm_id, tag_number):
            raise RowError(f"Tag {tag_number} already exists")

        return tag_number

    def _resolve_parents(self, session: Session, data: dict):
        for attr, parent_tag in data.pop("_parents").items():
            parent = AnimalService.find_by_tag(session, self.farm_id, parent_tag)
            if parent is None:
                raise RowError(f"Unknown parent tag {parent_tag}")
            data[attr] = parent.id
