"""
Input Validation Utilities

Format-level validators for onboarding fields. Each validator takes the raw
value and returns an error message, or None when the value is acceptable.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

FieldValidator = Callable[[Any], Optional[str]]

MIN_PHONE_LENGTH = 8

# Amount columns are NUMERIC(AMOUNT_PRECISION, AMOUNT_SCALE)
AMOUNT_PRECISION = 12
AMOUNT_SCALE = 2
AMOUNT_MAX_INTEGER_DIGITS = AMOUNT_PRECISION - AMOUNT_SCALE


class ValidationPatterns:
    """Validation regex patterns"""

    EMAIL = re.compile(r'\S+@\S+\.\S+')
    # One non-zero digit, a dash, then 12 digits (e.g. 2-163295213558)
    APPROVAL_CODE = re.compile(r'^[1-9]-[0-9]{12}$')
    UUID = re.compile(
        r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
        re.I,
    )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_required_text(value: Any) -> Optional[str]:
    """Non-empty after trimming."""
    if not _as_text(value):
        return "This field is required"
    return None


def validate_email(value: Any) -> Optional[str]:
    text = _as_text(value)
    if not text:
        return "Email is required"
    if not ValidationPatterns.EMAIL.search(text):
        return "Email must look like name@domain.tld"
    return None


def validate_phone(value: Any) -> Optional[str]:
    text = _as_text(value)
    if len(text) < MIN_PHONE_LENGTH:
        return f"Phone number must be at least {MIN_PHONE_LENGTH} characters"
    return None


def validate_approval_code(value: Any) -> Optional[str]:
    text = _as_text(value)
    if not text:
        return "Approval code is required"
    if not ValidationPatterns.APPROVAL_CODE.match(text):
        return "Approval code must be 1 digit (not 0), dash, 12 digits"
    return None


def validate_optional_amount(value: Any) -> Optional[str]:
    """
    Accept an empty value or a non-negative decimal.

    Amounts are opaque figures; no business rule is applied beyond the
    value being a number that the amount columns store exactly.
    """
    if value is None or _as_text(value) == "":
        return None
    try:
        amount = Decimal(_as_text(value))
    except InvalidOperation:
        return "Amount must be a number"
    if not amount.is_finite() or amount < 0:
        return "Amount must be a non-negative number"
    if len(str(int(amount))) > AMOUNT_MAX_INTEGER_DIGITS:
        return f"Amount must have at most {AMOUNT_MAX_INTEGER_DIGITS} digits before the decimal point"
    if amount != amount.quantize(Decimal(1).scaleb(-AMOUNT_SCALE)):
        return f"Amount must have at most {AMOUNT_SCALE} decimal places"
    return None


def is_valid_client_uuid(value: Any) -> bool:
    return bool(ValidationPatterns.UUID.match(_as_text(value)))


def normalize_text(value: Any) -> Optional[str]:
    text = _as_text(value)
    return text or None


def normalize_amount(value: Any) -> Optional[Decimal]:
    text = _as_text(value)
    if not text:
        return None
    return Decimal(text)


__all__ = [
    "AMOUNT_MAX_INTEGER_DIGITS",
    "AMOUNT_PRECISION",
    "AMOUNT_SCALE",
    "FieldValidator",
    "ValidationPatterns",
    "validate_required_text",
    "validate_email",
    "validate_phone",
    "validate_approval_code",
    "validate_optional_amount",
    "is_valid_client_uuid",
    "normalize_text",
    "normalize_amount",
]
