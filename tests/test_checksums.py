import pytest

from tagging.checksums import (
    ean13_check_digit,
    is_valid_ean13,
    is_valid_upc,
    upc_check_digit,
)


def test_known_ean13():
    assert ean13_check_digit("400638133393") == 1
    assert is_valid_ean13("4006381333931")
    assert not is_valid_ean13("4006381333932")


def test_known_upc():
    assert upc_check_digit("03600029145") == 2
    assert is_valid_upc("036000291452")
    assert not is_valid_upc("036000291453")


@pytest.mark.parametrize("base", ["000000000000", "123000000456", "999999999999", "501234567890"])
def test_ean13_weighted_sum_is_multiple_of_ten(base):
    code = base + str(ean13_check_digit(base))
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(code))
    assert total % 10 == 0


@pytest.mark.parametrize("base", ["00000000000", "01234567890", "99999999999"])
def test_upc_weighted_sum_is_multiple_of_ten(base):
    code = base + str(upc_check_digit(base))
    total = sum(int(d) * (3 if i % 2 == 0 else 1) for i, d in enumerate(code))
    assert total % 10 == 0


def test_check_digit_rejects_bad_input():
    with pytest.raises(ValueError):
        ean13_check_digit("123")
    with pytest.raises(ValueError):
        upc_check_digit("0123456789A")


def test_full_code_checks_reject_bad_input():
    assert not is_valid_ean13("12345")
    assert not is_valid_upc("ABCDEFGHIJKL")
