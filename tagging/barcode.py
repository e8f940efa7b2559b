"""
tagging.barcode - Per-symbology assembly of barcode tag numbers.

    code128   prefix + number (zero-padded to fill `length`)
    code39    same, prefix restricted to the Code 39 charset
    ean13     3 prefix digits + 9 number digits + check digit  (13)
    upc       1 prefix digit  + 10 number digits + check digit (12)

Only the data string is produced here; rendering bars is out of scope.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tagging.checksums import ean13_check_digit, upc_check_digit

CODE39_STRIP_RE = re.compile(r"[^A-Z0-9\-. $/+%]")
CODE39_RE = re.compile(r"^[A-Z0-9\-. $/+%]*$")
NON_DIGIT_RE = re.compile(r"\D")

# Symbology limits used when checking settings
CODE128_MAX = 48
CODE39_MAX = 43
EAN13_LENGTH = 13
UPC_LENGTH = 12


def _digits(prefix: str, width: int) -> str:
    return NON_DIGIT_RE.sub("", prefix)[:width].zfill(width)


def _fixed(number: int, width: int) -> str:
    return str(number).zfill(width)[:width]


def _padded(prefix: str, number: int, length: int, padding_zeros: bool) -> str:
    if not padding_zeros:
        return f"{prefix}{number}"
    return f"{prefix}{str(number).zfill(max(0, length - len(prefix)))}"


def format_barcode(
    prefix: str,
    number: int,
    barcode_type: str,
    length: int,
    padding_zeros: bool = True,
    include_check_digit: bool = False,
) -> str:
    """Build the data string for one barcode tag."""
    if barcode_type == "code128":
        return _padded(prefix, number, length, padding_zeros)

    if barcode_type == "code39":
        return _padded(CODE39_STRIP_RE.sub("", prefix), number, length, padding_zeros)

    if barcode_type == "ean13":
        base = _digits(prefix, 3) + _fixed(number, 9)
        check = str(ean13_check_digit(base)) if include_check_digit else "0"
        return base + check

    if barcode_type == "upc":
        base = _digits(prefix, 1) + _fixed(number, 10)
        check = str(upc_check_digit(base)) if include_check_digit else "0"
        return base + check

    return f"{prefix}{number}"


# ── Settings check ────────────────────────────────────────────────────

@dataclass
class BarcodeCheck:
    is_valid: bool
    errors: list[str]
    recommendations: list[str]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "recommendations": self.recommendations,
        }


def validate_barcode_settings(barcode_type: str, length: int, prefix: str) -> BarcodeCheck:
    """Sanity-check a barcode configuration before it is saved."""
    errors: list[str] = []
    tips: list[str] = []
    prefix_digits = NON_DIGIT_RE.sub("", prefix or "")

    if barcode_type == "ean13":
        if length != EAN13_LENGTH:
            errors.append("EAN-13 must be exactly 13 digits")
        if len(prefix_digits) > 3:
            errors.append("EAN-13 prefix should be 3 digits or less")
        tips.append("Consider including check digit for better scan accuracy")
    elif barcode_type == "upc":
        if length != UPC_LENGTH:
            errors.append("UPC-A must be exactly 12 digits")
        if len(prefix_digits) > 2:
            errors.append("UPC-A prefix should be 2 digits or less")
    elif barcode_type == "code128":
        if length > CODE128_MAX:
            errors.append(f"Code 128 should not exceed {CODE128_MAX} characters")
        tips.append("Code 128 is most versatile for mixed alphanumeric data")
    elif barcode_type == "code39":
        if length > CODE39_MAX:
            errors.append(f"Code 39 should not exceed {CODE39_MAX} characters")
        if not CODE39_RE.match(prefix or ""):
            errors.append("Code 39 prefix contains unsupported characters")
    else:
        errors.append(f"Unknown barcode type: {barcode_type!r}")

    return BarcodeCheck(not errors, errors, tips)
