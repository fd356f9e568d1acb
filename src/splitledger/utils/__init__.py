"""Utility functions for splitledger."""

from splitledger.utils.date_parser import parse_date, format_date, add_period
from splitledger.utils.amount_parser import parse_amount, format_amount

__all__ = ["parse_date", "format_date", "add_period", "parse_amount", "format_amount"]
