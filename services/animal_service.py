"""
services.animal_service - Animal records as far as tagging needs them.

All session management is the caller's responsibility (open before,
close/commit after), except that tag generation draws its sequence
number through the generator's own store.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from db.models import Animal
from tagging.generator import TagGenerator
from tagging.models import AttributeValue, GeneratedTag, GenerationContext
from tagging.numbering import suggest_alternative_tags
from tagging.validator import validate_tag_number

INACTIVE = "inactive"
GENDERS = ("female", "male")

# Body keys copied straight onto a new Animal
_ANIMAL_FIELDS = (
    "name", "breed", "gender", "production_status", "animal_source",
    "birth_date", "mother_id", "father_id", "notes",
)


class AnimalError(Exception):
    """Raised when an animal cannot be created."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.errors = errors or [message]
        super().__init__(message)


class DuplicateTagError(AnimalError):
    """Manual tag already held; carries free alternatives near it."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        self.suggestions = suggestions or []
        super().__init__(message)


def context_from_animal(data: dict) -> GenerationContext:
    """
    Build a generation context from an animal body / import row.
    Raises ValueError when custom_attributes is not a list of objects.
    """
    attrs = data.get("custom_attributes") or []
    if not isinstance(attrs, list):
        raise ValueError("custom_attributes must be a list")
    return GenerationContext(
        animal_source=str(data.get("animal_source") or "newborn_calf"),
        animal_data={k: data.get(k) for k in _ANIMAL_FIELDS if data.get(k)},
        custom_attributes=[AttributeValue.from_dict(a) for a in attrs],
    )


class AnimalService:

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def tag_exists(session: Session, farm_id: str, tag_number: str) -> bool:
        """True if an active (non-inactive) animal of the farm holds the tag."""
        return session.query(Animal.id).filter(
            Animal.farm_id == farm_id,
            Animal.tag_number == tag_number,
            Animal.status != INACTIVE,
        ).first() is not None

    @staticmethod
    def get(session: Session, farm_id: str, animal_id: str) -> Optional[Animal]:
        animal = session.get(Animal, animal_id)
        if animal is None or animal.farm_id != farm_id:
            return None
        return animal

    @staticmethod
    def find_by_tag(session: Session, farm_id: str, tag_number: str) -> Optional[Animal]:
        return session.query(Animal).filter(
            Animal.farm_id == farm_id,
            Animal.tag_number == tag_number,
            Animal.status != INACTIVE,
        ).first()

    @staticmethod
    def search(session: Session, farm_id: str, status: str = "",
               limit: int = 100, offset: int = 0) -> tuple[list[Animal], int]:
        q = session.query(Animal).filter(Animal.farm_id == farm_id)
        if status:
            q = q.filter(Animal.status == status)
        total = q.count()
        rows = q.order_by(Animal.created_at, Animal.tag_number).offset(offset).limit(limit).all()
        return rows, total

    @staticmethod
    def suggest_tags(session: Session, farm_id: str, desired: str, count: int = 5) -> list[str]:
        """Free tags near `desired` among the farm's active animals."""
        held = session.query(Animal.tag_number).filter(
            Animal.farm_id == farm_id,
            Animal.status != INACTIVE,
        )
        return suggest_alternative_tags(desired, [t for (t,) in held], count)

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create(
        session: Session,
        farm_id: str,
        data: dict,
        generator: TagGenerator,
    ) -> tuple[Animal, Optional[GeneratedTag]]:
        """
        Create an animal.  The tag is generated when the body carries no
        tag_number or sets auto_generate_tag; a manual tag must pass
        validate_tag_number and be free.  Raises AnimalError.
        """
        gender = str(data.get("gender") or "").strip().lower()
        if gender not in GENDERS:
            raise AnimalError("gender must be 'female' or 'male'")

        generated: Optional[GeneratedTag] = None
        tag_number = str(data.get("tag_number") or "").strip()

        if not tag_number or data.get("auto_generate_tag"):
            try:
                context = context_from_animal(data)
            except ValueError as exc:
                raise AnimalError(str(exc)) from None
            generated = generator.generate_tag(farm_id, context)
            tag_number = generated.tag_number
        else:
            check = validate_tag_number(tag_number)
            if not check.is_valid:
                raise AnimalError("Invalid tag number", check.errors)
            if AnimalService.tag_exists(session, farm_id, tag_number):
                raise DuplicateTagError(
                    f"Tag {tag_number} already exists",
                    AnimalService.suggest_tags(session, farm_id, tag_number),
                )

        animal = Animal(farm_id=farm_id, tag_number=tag_number)
        for key in _ANIMAL_FIELDS:
            val = data.get(key)
            if val not in (None, ""):
                setattr(animal, key, str(val).strip())
        animal.gender = gender

        session.add(animal)
        session.flush()
        return animal, generated
