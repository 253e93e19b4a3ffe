"""Phone number validation."""

from __future__ import annotations

import phonenumbers
from phonenumbers import NumberParseException

DEFAULT_REGION = "US"

# Digits in a US national number, area code included
US_NUMBER_LENGTH = 10


def is_valid_phone_number(phone: str, region: str = DEFAULT_REGION) -> bool:
    """Check whether `phone` is a possible number with a full national number.

    Rules:
    - Must parse for `region`
    - Must be a possible number for its region
    - National number must have exactly 10 digits

    The length rule rejects local numbers without an area code, which
    the library still reports as possible.
    """
    if not isinstance(phone, str):
        return False

    try:
        number = phonenumbers.parse(phone, region)
    except NumberParseException:
        return False

    length_is_valid = len(str(number.national_number)) == US_NUMBER_LENGTH
    return phonenumbers.is_possible_number(number) and length_is_valid
