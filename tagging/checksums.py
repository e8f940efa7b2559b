"""
tagging.checksums - Check digits for EAN-13 and UPC-A.

Weights are applied left-to-right on the payload digits:
    EAN-13  (12 digits)  even index ×1, odd index ×3
    UPC-A   (11 digits)  even index ×3, odd index ×1
check = (10 - sum % 10) % 10
"""

from __future__ import annotations


def _weighted_check(digits: str, length: int, even_weight: int, odd_weight: int) -> int:
    if len(digits) != length or not digits.isdigit():
        raise ValueError(f"expected {length} digits, got {digits!r}")
    total = sum(
        int(d) * (even_weight if i % 2 == 0 else odd_weight)
        for i, d in enumerate(digits)
    )
    return (10 - total % 10) % 10


def ean13_check_digit(base: str) -> int:
    return _weighted_check(base, 12, 1, 3)


def upc_check_digit(base: str) -> int:
    return _weighted_check(base, 11, 3, 1)


def is_valid_ean13(code: str) -> bool:
    """True if a 13-digit code carries a correct trailing check digit."""
    if len(code) != 13 or not code.isdigit():
        return False
    return ean13_check_digit(code[:12]) == int(code[12])


def is_valid_upc(code: str) -> bool:
    if len(code) != 12 or not code.isdigit():
        return False
    return upc_check_digit(code[:11]) == int(code[11])
