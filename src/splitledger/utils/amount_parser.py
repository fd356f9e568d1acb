"""Amount parsing and formatting utilities."""

from decimal import Decimal, ROUND_HALF_UP
import re


DEFAULT_CURRENCY = "CHF"

AMOUNT_PATTERN = r"(?P<amount>[0-9]+\.[0-9]+)"

_AMOUNT_RE = re.compile(rf"^{AMOUNT_PATTERN}$")

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a ledger amount string into a Decimal.

    Ledger amounts are non-negative and always carry a fractional part:
    - "12.50"
    - "0.5"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()
    if _AMOUNT_RE.match(amount_str) is None:
        raise ValueError(
            f"Could not parse amount '{amount_str}': expected digits, '.' and a fractional part"
        )
    return Decimal(amount_str)


def round_to_cents(amount: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount for statements.

    The amount is rounded to cents, then written as the integer part, ".",
    and either the two cent digits or "-" when there are no cents, followed by
    the currency: "12.50 CHF", "12.- CHF".

    Raises:
        ValueError: If the amount is negative
    """
    if amount < 0:
        raise ValueError(f"Cannot format negative amount {amount}")

    rounded = round_to_cents(Decimal(amount))
    units = int(rounded)
    cents = int((rounded - units) * 100)
    if cents > 0:
        return f"{units}.{cents:02d} {currency}"
    return f"{units}.- {currency}"
