"""
Phone number normalization utilities
"""
import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat


def normalize_phone(phone: str) -> str:
    """
    Normalize a phone number for use as a lookup key.

    Numbers written with a country code that phonenumbers recognizes as valid
    are rewritten to E.164 (e.g. "+55 11 99999-0000" -> "+5511999990000").
    Anything else is only trimmed, so demo identifiers still work.

    Returns:
        Normalized phone string ("" if the input was blank)
    """
    cleaned = (phone or "").strip()
    if not cleaned.startswith("+"):
        return cleaned

    try:
        parsed = phonenumbers.parse(cleaned, None)
    except NumberParseException:
        return cleaned

    if not phonenumbers.is_valid_number(parsed):
        return cleaned
    return phonenumbers.format_number(parsed, PhoneNumberFormat.E164)


def get_phone_last4(phone: str) -> str:
    """
    Get last 4 digits of phone number for safe logging.

    Returns:
        Last 4 digits as string, or all digits if fewer than 4
    """
    digits = ''.join(filter(str.isdigit, phone or ""))
    if len(digits) >= 4:
        return digits[-4:]
    return digits
