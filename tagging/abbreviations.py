"""
tagging.abbreviations - Fixed-width codes for breed, production stage
and animal source.

Lookups are case-insensitive exact matches; anything unknown falls back
to its first two letters uppercased so previews stay reproducible.
"""

from __future__ import annotations

BREED_CODES: dict[str, str] = {
    "holstein":    "HO",
    "jersey":      "JE",
    "guernsey":    "GU",
    "ayrshire":    "AY",
    "brown_swiss": "BR",
    "crossbred":   "CR",
    "friesian":    "FR",
    "angus":       "AN",
    "hereford":    "HE",
    "simmental":   "SI",
    "charolais":   "CH",
    "limousin":    "LI",
    "other":       "OT",
}

PRODUCTION_STAGE_CODES: dict[str, str] = {
    "calf":      "CA",
    "heifer":    "HE",
    "served":    "SE",
    "lactating": "LA",
    "dry":       "DR",
    "pregnant":  "PR",
}

SOURCE_CODES: dict[str, str] = {
    "newborn_calf":     "BC",
    "purchased_animal": "PU",
}


def _lookup(table: dict[str, str], key: str) -> str:
    key = (key or "").strip()
    return table.get(key.lower()) or key[:2].upper()


def breed_abbreviation(breed: str) -> str:
    return _lookup(BREED_CODES, breed)


def production_stage_abbreviation(status: str) -> str:
    return _lookup(PRODUCTION_STAGE_CODES, status)


def source_code(animal_source: str) -> str:
    """newborn_calf → BC; every other source counts as purchased."""
    return SOURCE_CODES["newborn_calf"] if animal_source == "newborn_calf" else SOURCE_CODES["purchased_animal"]
