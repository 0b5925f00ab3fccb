from decimal import Decimal

import pytest

from placement.core.validators import (
    is_valid_client_uuid,
    normalize_amount,
    normalize_text,
    validate_approval_code,
    validate_email,
    validate_optional_amount,
    validate_phone,
    validate_required_text,
)


@pytest.mark.parametrize("value", ["2-163295213558", "9-000000000000", " 1-123456789012 "])
def test_approval_code_accepts_valid_codes(value):
    assert validate_approval_code(value) is None


@pytest.mark.parametrize(
    "value",
    [
        "0-123456789012",
        "2163295213558",
        "2-16329521355",
        "2-1632952135589",
        "a-163295213558",
        "2-" + "\u0661" * 12,
        "\u0662-163295213558",
        "",
        None,
    ],
)
def test_approval_code_rejects_invalid_codes(value):
    assert validate_approval_code(value) is not None


def test_email_needs_local_part_domain_and_suffix():
    assert validate_email("ada@example.com") is None
    assert validate_email("ada@example") is not None
    assert validate_email("ada.example.com") is not None
    assert validate_email("   ") is not None


def test_phone_counts_characters_after_trimming():
    assert validate_phone("04123456") is None
    assert validate_phone("  0412345  ") is not None
    assert validate_phone(None) is not None


def test_required_text_rejects_blank_values():
    assert validate_required_text("Royal North Shore") is None
    assert validate_required_text("   ") is not None
    assert validate_required_text(None) is not None


def test_optional_amount():
    assert validate_optional_amount(None) is None
    assert validate_optional_amount("") is None
    assert validate_optional_amount("350000") is None
    assert validate_optional_amount(Decimal("12.50")) is None
    assert validate_optional_amount("-1") is not None
    assert validate_optional_amount("lots") is not None
    assert validate_optional_amount("NaN") is not None


def test_normalizers_trim_and_blank_to_none():
    assert normalize_text("  Ada ") == "Ada"
    assert normalize_text("   ") is None
    assert normalize_amount(" 350000 ") == Decimal("350000")
    assert normalize_amount("") is None


def test_client_uuid_format():
    assert is_valid_client_uuid("6f1c1a2e-8a4b-4c55-9d7e-0b8f3f2a9c11")
    assert not is_valid_client_uuid("not-a-uuid")
    assert not is_valid_client_uuid(None)


@pytest.mark.parametrize("value", ["0.01", "1.50", "1.500", "9999999999.99", "1E+2"])
def test_optional_amount_accepts_values_the_column_stores_exactly(value):
    assert validate_optional_amount(value) is None


@pytest.mark.parametrize(
    "value",
    ["0.005", "1e-30", "12.345", "123456789012345.678", "10000000000", "1e30"],
)
def test_optional_amount_rejects_values_the_column_would_change(value):
    assert validate_optional_amount(value) is not None
