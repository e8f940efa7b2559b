import pytest

from factories import TaggingSettingsFactory
from tagging.errors import ValidationError
from tagging.validator import ensure_valid, validate_generated_tag, validate_tag_number


def test_plain_tag_is_valid():
    assert validate_generated_tag("COW-001", TaggingSettingsFactory()).is_valid


@pytest.mark.parametrize("tag, message", [
    ("", "Tag number cannot be empty"),
    ("COW 001", "Tag number contains invalid characters"),
    ("C" * 51, "Tag number exceeds maximum length (50 characters)"),
])
def test_general_rules(tag, message):
    result = validate_generated_tag(tag, TaggingSettingsFactory())
    assert message in result.errors


def test_ean13_shape():
    settings = TaggingSettingsFactory(ean13=True)
    assert validate_generated_tag("1230000004565", settings).is_valid
    assert "EAN-13 barcode must be exactly 13 digits" in \
        validate_generated_tag("1230000004565-1", settings).errors


def test_upc_shape():
    settings = TaggingSettingsFactory(upc=True)
    assert not validate_generated_tag("12345", settings).is_valid


def test_barcode_rules_only_apply_in_barcode_mode():
    settings = TaggingSettingsFactory(barcode_type="ean13")
    assert validate_generated_tag("COW-001", settings).is_valid


def test_ensure_valid_raises_with_errors():
    with pytest.raises(ValidationError) as exc_info:
        ensure_valid("COW 1", TaggingSettingsFactory())
    assert exc_info.value.tag_number == "COW 1"
    assert exc_info.value.errors


@pytest.mark.parametrize("tag", ["COW-001", "ABC_12", "X1"])
def test_manual_tags_accepted(tag):
    assert validate_tag_number(tag).is_valid


@pytest.mark.parametrize("tag", ["", "-COW", "COW-", "COW--1", "COW/1", "A" * 51])
def test_manual_tags_rejected(tag):
    assert not validate_tag_number(tag).is_valid
