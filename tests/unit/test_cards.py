"""Unit tests for card number validation"""

import pytest
from bike_billing.domain.cards import is_well_formed, luhn_checksum_ok, validate_card


def test_validate_card_valid_number():
    """Test well-known test Visa number with separators"""
    assert validate_card("4111 1111 1111 1111") is True


def test_validate_card_valid_without_separators():
    assert validate_card("4111111111111111") is True


def test_validate_card_non_numeric_characters():
    """Test letter inside the card number"""
    assert validate_card("4111 1111 A111 1111") is False


def test_validate_card_empty():
    assert validate_card("") is False


def test_validate_card_only_spaces():
    assert validate_card("    ") is False


def test_validate_card_altered_digit():
    """Test single digit substitution breaks the checksum"""
    assert validate_card("4111 1111 1111 1121") is False


@pytest.mark.parametrize("card_number", ["4111-1111-1111-1111", "4111\t1111", "٤١١١١١١١١١١١١١١١"])
def test_validate_card_rejects_other_separators_and_non_ascii_digits(card_number):
    assert validate_card(card_number) is False


def test_validate_card_non_string_input():
    """Test validator is total over unexpected input types"""
    assert validate_card(None) is False
    assert validate_card(4111111111111111) is False


def test_luhn_checksum_doubling():
    """Test doubled digits above 9 are reduced (59 → 5*2-9=1, 1+9=10)"""
    assert luhn_checksum_ok("59") is True
    assert luhn_checksum_ok("58") is False


def test_is_well_formed_ignores_checksum():
    assert is_well_formed("1234567890") is True
    assert validate_card("1234567890") is False
