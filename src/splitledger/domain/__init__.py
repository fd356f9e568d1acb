"""Domain layer for splitledger application."""

from splitledger.domain.account import AccountRegistry
from splitledger.domain.balance import Balance, compute_balance, compute_ledger_balance
from splitledger.domain.parser import LedgerParser, load_ledger, parse_ledger
from splitledger.domain.recurrence import expand_occurrences
from splitledger.domain.statement import StatementService

__all__ = [
    "AccountRegistry",
    "Balance",
    "compute_balance",
    "compute_ledger_balance",
    "LedgerParser",
    "load_ledger",
    "parse_ledger",
    "expand_occurrences",
    "StatementService",
]
