"""Card number validation (format and Luhn checksum)"""

SEPARATOR = " "


def is_well_formed(card_number: str) -> bool:
    """Non-empty and made only of decimal digits and separating spaces"""
    if not isinstance(card_number, str):
        return False
    digits = card_number.replace(SEPARATOR, "")
    return bool(digits) and all(ch in "0123456789" for ch in digits)


def luhn_checksum_ok(digits: str) -> bool:
    """
    Mod-10 check over a string of ASCII digits.

    Every second digit from the right is doubled; doubled values above 9
    have 9 subtracted. The number is valid when the total is a multiple of 10.
    """
    total = 0
    for position, ch in enumerate(reversed(digits)):
        value = ord(ch) - ord("0")
        if position % 2 == 1:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return total % 10 == 0


def validate_card(card_number: str) -> bool:
    """
    Validate a card number string.

    Example:
        "4111 1111 1111 1111" → True
        "4111 1111 1111 1121" → False (checksum)
        "4111 1111 A111 1111" → False (non-digit)
    """
    if not is_well_formed(card_number):
        return False
    return luhn_checksum_ok(card_number.replace(SEPARATOR, ""))
