import pytest

from db.models import Animal, TaggingSettingsRecord
from services.animal_service import AnimalError, AnimalService, DuplicateTagError
from services.sequence_service import next_sequence
from services.settings_service import SettingsError, SettingsService, validate_settings
from services.tag_store import SqlTagStore
from tagging.generator import TagGenerator
from tagging.models import GenerationContext, TaggingSettings


# ── Sequence counter ─────────────────────────────────────────────────

def test_sequence_starts_at_one_and_creates_settings(session):
    assert next_sequence(session, "farm-1") == 1
    session.commit()
    record = session.get(TaggingSettingsRecord, "farm-1")
    assert record.next_number == 2
    assert [a.name for a in record.attributes] == ["Breed Group", "Production Stage"]


def test_sequence_is_monotonic(session):
    values = []
    for _ in range(5):
        values.append(next_sequence(session, "farm-1"))
        session.commit()
    assert values == [1, 2, 3, 4, 5]


def test_sequences_are_per_farm(session):
    next_sequence(session, "farm-1")
    next_sequence(session, "farm-1")
    session.commit()
    assert next_sequence(session, "farm-2") == 1


# ── Settings ──────────────────────────────────────────────────────────

def test_settings_default_when_never_saved(session):
    settings = SettingsService.get(session, "farm-1")
    assert settings.tag_prefix == "COW"
    assert settings.numbering_system == "sequential"
    assert session.get(TaggingSettingsRecord, "farm-1") is None


def test_settings_update_persists(session):
    SettingsService.update(session, "farm-1", {
        "numbering_system": "custom",
        "custom_format": "{PREFIX}-{PEN}-{NUMBER:4}",
        "tag_prefix": "HF",
        "custom_attributes": [{"name": "Pen", "values": ["North", "South"]}],
    })
    session.commit()
    settings = SettingsService.get(session, "farm-1")
    assert settings.custom_format == "{PREFIX}-{PEN}-{NUMBER:4}"
    assert [a.name for a in settings.custom_attributes] == ["Pen"]


def test_settings_update_never_moves_counter(session):
    next_sequence(session, "farm-1")
    session.commit()
    SettingsService.update(session, "farm-1", {"tag_prefix": "HF", "next_number": 99})
    session.commit()
    assert session.get(TaggingSettingsRecord, "farm-1").next_number == 2


def test_settings_update_rejects_invalid(session):
    with pytest.raises(SettingsError) as exc_info:
        SettingsService.update(session, "farm-1", {"tag_prefix": "cow!"})
    assert "Tag prefix must be 1-10 uppercase letters or numbers" in exc_info.value.errors


def test_validate_settings_checks_format_and_barcode():
    errors = validate_settings({"numbering_system": "custom", "custom_format": "{FOO}"})
    assert "Unsupported placeholder: {FOO}" in errors
    errors = validate_settings({"numbering_system": "barcode", "barcode_type": "ean13",
                                "barcode_length": 8, "tag_prefix": "123"})
    assert "EAN-13 must be exactly 13 digits" in errors


def test_validate_settings_duplicate_attributes():
    errors = validate_settings({"custom_attributes": [
        {"name": "Pen", "values": ["A"]}, {"name": "pen", "values": ["B"]},
    ]})
    assert "Custom attribute names must be unique" in errors


def test_validate_settings_wrongly_typed_values():
    assert "Each custom attribute must be an object" in validate_settings(
        {"custom_attributes": ["Pen", {"name": "Pen", "values": ["A"]}]})
    assert "custom_attributes must be a list" in validate_settings({"custom_attributes": "Pen"})
    assert "tag_prefix must be a string" in validate_settings({"tag_prefix": 12})
    errors = validate_settings({"custom_attributes": [{"name": "Pen", "values": "A"}]})
    assert "Custom attribute 1: Values must be a list" in errors


def test_settings_from_dict_rejects_wrong_types():
    with pytest.raises(ValueError):
        TaggingSettings.from_dict({"barcode_length": "abc"})
    with pytest.raises(ValueError):
        TaggingSettings.from_dict({"custom_attributes": ["Pen"]})
    with pytest.raises(ValueError):
        GenerationContext.from_dict({"animal_data": "holstein"})
    assert TaggingSettings.from_dict({"barcode_length": "12"}).barcode_length == 12


# ── Animals / store ───────────────────────────────────────────────────

def test_inactive_animals_do_not_hold_tags(session):
    session.add(Animal(farm_id="farm-1", tag_number="COW-001", gender="female", status="inactive"))
    session.add(Animal(farm_id="farm-1", tag_number="COW-002", gender="female"))
    session.commit()
    store = SqlTagStore()
    assert not store.tag_exists("farm-1", "COW-001")
    assert store.tag_exists("farm-1", "COW-002")
    assert not store.tag_exists("farm-2", "COW-002")


def test_store_generates_consecutive_tags(app):
    generator = TagGenerator(SqlTagStore())
    assert generator.generate_tag_number("farm-1") == "COW-001"
    assert generator.generate_tag_number("farm-1") == "COW-002"


def test_store_skips_tags_held_by_animals(session):
    session.add(Animal(farm_id="farm-1", tag_number="COW-001", gender="male"))
    session.commit()
    generated = TagGenerator(SqlTagStore()).generate_tag("farm-1")
    assert generated.tag_number == "COW-002"
    assert generated.outcome == "alternative"


def test_create_animal_generates_tag(session):
    animal, generated = AnimalService.create(
        session, "farm-1", {"gender": "female", "breed": "jersey"}, TagGenerator(SqlTagStore()))
    session.commit()
    assert animal.tag_number == "COW-001"
    assert generated.outcome == "generated"


def test_create_animal_manual_tag_checks(session):
    generator = TagGenerator(SqlTagStore())
    AnimalService.create(session, "farm-1", {"gender": "male", "tag_number": "BULL-1"}, generator)
    session.commit()
    with pytest.raises(DuplicateTagError) as info:
        AnimalService.create(session, "farm-1", {"gender": "male", "tag_number": "BULL-1"}, generator)
    assert info.value.suggestions[0] == "BULL-002"
    assert "BULL-1" not in info.value.suggestions
    session.rollback()
    with pytest.raises(AnimalError):
        AnimalService.create(session, "farm-1", {"gender": "male", "tag_number": "BULL--2"}, generator)
    with pytest.raises(AnimalError):
        AnimalService.create(session, "farm-1", {"gender": "unknown"}, generator)
