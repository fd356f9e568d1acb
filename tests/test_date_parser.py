"""Tests for ledger date parsing and period arithmetic."""

import pytest
from datetime import date

from splitledger.domain.recurrence import parse_period
from splitledger.domain.entities import Period
from splitledger.utils.date_parser import add_period, format_date, parse_date, split_date


def test_parse_padded_date():
    """Test parsing a zero padded date."""
    assert parse_date("01.02.2024") == date(2024, 2, 1)


def test_parse_unpadded_date():
    """Test parsing a date without padding."""
    assert parse_date("1.2.2024") == date(2024, 2, 1)


def test_parse_date_strips_whitespace():
    assert parse_date(" 31.12.2023 ") == date(2023, 12, 31)


@pytest.mark.parametrize(
    "value", ["2024-01-15", "1.1.24", "1/1/2024", "", "today", "١.١.٢٠٢٤", "１.１.２０２４"]
)
def test_parse_date_rejects_other_formats(value):
    """Test that only D.M.YYYY is accepted."""
    with pytest.raises(ValueError):
        parse_date(value)


def test_parse_date_rejects_invalid_calendar_date():
    """Test that 30 February is rejected."""
    with pytest.raises(ValueError, match="30.2.2024"):
        parse_date("30.2.2024")


def test_split_date_does_not_validate():
    """Test that split_date accepts field values that are not a calendar date."""
    assert split_date("0.1.0000") == (0, 1, 0)


def test_format_date_has_no_padding():
    assert format_date(date(2024, 3, 5)) == "5.3.2024"


def test_add_days():
    assert add_period(date(2024, 1, 30), days=3) == date(2024, 2, 2)


def test_add_months_rolls_into_next_year():
    """Test that month 13 becomes January of the next year."""
    assert add_period(date(2024, 11, 15), months=2) == date(2025, 1, 15)


def test_add_years():
    assert add_period(date(2024, 6, 1), years=2) == date(2026, 6, 1)


def test_add_months_clamps_to_month_end():
    assert add_period(date(2024, 1, 31), months=1) == date(2024, 2, 29)


def test_add_period_applies_days_last():
    """Test that the day offset is applied after months."""
    assert add_period(date(2024, 1, 31), days=1, months=1) == date(2024, 3, 1)


def test_parse_monthly_period():
    assert parse_period("0.1.0000") == Period(days=0, months=1, years=0)


def test_parse_period_reads_years_from_year_field():
    assert parse_period("2.0.0001") == Period(days=2, months=0, years=1)


def test_parse_period_legacy_years_come_from_day_field():
    """Test the legacy interpretation where years repeat the day count."""
    assert parse_period("2.0.0001", legacy_years=True) == Period(days=2, months=0, years=2)


def test_parse_period_rejects_garbage():
    with pytest.raises(ValueError):
        parse_period("monthly")
