"""Domain model entities for splitledger.

These are pure data classes. Accounts are referenced everywhere else by their
index in the account registry, never by the Account object itself.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from splitledger.domain.errors import ValidationError

if TYPE_CHECKING:
    from splitledger.domain.account import AccountRegistry


DEFAULT_HEADER_KEYWORD = "accounting_date"


@dataclass(frozen=True)
class Account:
    """Ledger participant, identified by a two letter acronym."""

    acronym: str
    name: str = field(compare=False)


@dataclass(frozen=True)
class Period:
    """Recurrence increment of days, months and years."""

    days: int = 0
    months: int = 0
    years: int = 0

    def __mul__(self, factor: int) -> "Period":
        return Period(
            days=self.days * factor,
            months=self.months * factor,
            years=self.years * factor,
        )

    @property
    def is_empty(self) -> bool:
        return self.days == 0 and self.months == 0 and self.years == 0


class TransactionRole(Enum):
    """Role of a transaction in the netting step."""

    INVOICE = "invoice"
    PAYMENT = "payment"


@dataclass(frozen=True)
class Transaction:
    """Invoice or payment between two accounts."""

    sender_index: int
    recipient_index: int
    amount: Decimal
    date: date
    note: str
    role: TransactionRole = TransactionRole.INVOICE

    def __post_init__(self):
        if self.sender_index == self.recipient_index:
            raise ValidationError(
                f"Transaction sender and recipient must differ (index {self.sender_index})"
            )
        if self.amount < 0:
            raise ValidationError(f"Transaction amount must not be negative: {self.amount}")

    @property
    def signed_amount(self) -> Decimal:
        """Contribution of this transaction to its pair's balance."""
        if self.role is TransactionRole.INVOICE:
            return -self.amount
        return self.amount

    def involves(self, account_index: int) -> bool:
        return account_index in (self.sender_index, self.recipient_index)


@dataclass(frozen=True)
class BalanceEntry:
    """Running balance between an unordered pair of accounts.

    A negative balance means ``sender_index`` owes ``recipient_index``;
    a positive balance means ``recipient_index`` owes ``sender_index``.
    The orientation is fixed when the entry is created.
    """

    sender_index: int
    recipient_index: int
    balance: Decimal = Decimal("0")

    def __post_init__(self):
        if self.sender_index == self.recipient_index:
            raise ValidationError(
                f"Balance entry needs two different accounts (index {self.sender_index})"
            )

    def involves(self, account_index: int) -> bool:
        return account_index in (self.sender_index, self.recipient_index)


@dataclass(frozen=True)
class Ledger:
    """Parsed ledger: reference date, accounts, invoices and payments."""

    reference_date: date
    accounts: "AccountRegistry"
    invoices: tuple[Transaction, ...] = ()
    payments: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class ParserOptions:
    """Parser policies.

    Attributes:
        header_keyword: Keyword that starts the header line
        merge_duplicate_invoices: Fold an invoice into an earlier one with the
            same account pair, date and note
        legacy_period_years: Read the period's years from its day field
    """

    header_keyword: str = DEFAULT_HEADER_KEYWORD
    merge_duplicate_invoices: bool = False
    legacy_period_years: bool = False


@dataclass(frozen=True)
class Debt:
    """Open amount owed by one account to another."""

    debtor_index: int
    creditor_index: int
    amount: Decimal


@dataclass(frozen=True)
class Statement:
    """Per-account statement built from a ledger and its balance."""

    account_index: int
    account: Account
    reference_date: date
    to_pay: tuple[Transaction, ...] = ()
    credited: tuple[Transaction, ...] = ()
    paid: tuple[Transaction, ...] = ()
    received: tuple[Transaction, ...] = ()
    outstanding: tuple[Debt, ...] = ()

    @property
    def is_settled(self) -> bool:
        return not self.outstanding

    @property
    def net_outstanding(self) -> Decimal:
        """Net amount owed to the account (negative when it owes money)."""
        total = Decimal("0")
        for debt in self.outstanding:
            if debt.creditor_index == self.account_index:
                total += debt.amount
            else:
                total -= debt.amount
        return total
