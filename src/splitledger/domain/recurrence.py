"""Recurrence expansion for periodic invoices."""

from datetime import date
from typing import Optional

from splitledger.domain.entities import Period
from splitledger.domain.errors import ValidationError
from splitledger.utils.date_parser import add_period, split_date


def parse_period(period_str: str, legacy_years: bool = False) -> Period:
    """Parse a recurrence period written in date syntax.

    "dd.mm.yyyy" means every dd days, mm months and yyyy years, so "0.1.0000"
    is monthly and "7.0.0000" is weekly.

    Args:
        period_str: Period string
        legacy_years: Take the years from the day field, as old ledgers did

    Returns:
        Period

    Raises:
        ValueError: If period string cannot be parsed
    """
    days, months, years = split_date(period_str)
    if legacy_years:
        years = days
    return Period(days=days, months=months, years=years)


def expand_occurrences(
    start: date,
    end: Optional[date],
    period: Optional[Period],
    reference: date,
) -> list[date]:
    """Return the occurrence dates of an invoice.

    Without a recurrence (``end`` or ``period`` is None) the only occurrence is
    ``start``. Otherwise the k-th occurrence is ``start`` plus k periods, and
    occurrences are produced until one falls after ``min(end, reference)``
    or past the last representable date.

    Args:
        start: First occurrence
        end: Last possible occurrence, or None
        period: Increment between occurrences, or None
        reference: Reference date of the ledger

    Returns:
        Strictly increasing list of dates starting with ``start``

    Raises:
        ValidationError: If the period is empty
    """
    occurrences = [start]
    if end is None or period is None:
        return occurrences

    if period.is_empty:
        raise ValidationError("Recurrence period must not be zero")

    last = min(end, reference)
    count = 1
    while True:
        step = period * count
        try:
            current = add_period(start, days=step.days, months=step.months, years=step.years)
        except (OverflowError, ValueError):
            # Stepped past date.max, which is after any possible end
            break
        if current > last:
            break
        occurrences.append(current)
        count += 1
    return occurrences
