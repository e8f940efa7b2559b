"""
import_engine.field_map - Column-name ↔ Animal-attribute mapping.

Headers are normalised by csv_parser (lower-case, spaces → '_') before
lookup, so "Tag Number", "tag number" and "tag_number" all match.
"""

# normalised CSV column  →  Animal attribute / row key
DIRECT_FIELDS: dict[str, str] = {
    "tag_number":        "tag_number",
    "tag":               "tag_number",
    "name":              "name",
    "breed":             "breed",
    "gender":            "gender",
    "sex":               "gender",
    "production_status": "production_status",
    "status":            "production_status",
    "animal_source":     "animal_source",
    "source":            "animal_source",
    "birth_date":        "birth_date",
    "date_of_birth":     "birth_date",
    "notes":             "notes",
}

# Columns naming a parent by tag; resolved to ids within the farm
PARENT_COLUMNS: dict[str, str] = {
    "mother_tag": "mother_id",
    "dam_tag":    "mother_id",
    "father_tag": "father_id",
    "sire_tag":   "father_id",
}

SOURCE_ALIASES: dict[str, str] = {
    "born":      "newborn_calf",
    "newborn":   "newborn_calf",
    "calf":      "newborn_calf",
    "purchased": "purchased_animal",
    "bought":    "purchased_animal",
}

# Everything else in a row is offered to the tag engine as a custom attribute
KNOWN_COLUMNS = frozenset(DIRECT_FIELDS) | frozenset(PARENT_COLUMNS)
