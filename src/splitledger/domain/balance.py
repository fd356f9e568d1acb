"""Pairwise balance netting."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Iterator, Optional

from splitledger.domain.entities import BalanceEntry, Ledger, Transaction

logger = logging.getLogger(__name__)


class Balance:
    """Net balance per unordered pair of accounts.

    Entries are kept in the order their pair was first seen. An entry's
    orientation is the (sender, recipient) of the first transaction between
    the pair; later transactions only change its amount. Entries are never
    removed, even when they net to zero.

    Stored entries are frozen. Every update swaps in a new snapshot for the
    pair, so entries handed out earlier keep the balance they had.
    """

    def __init__(self):
        self._entries: dict[tuple[int, int], BalanceEntry] = {}

    def apply(self, sender_index: int, recipient_index: int, amount: Decimal) -> BalanceEntry:
        """Fold a signed amount into the balance of a pair.

        Args:
            sender_index: Sender account index
            recipient_index: Recipient account index
            amount: Signed amount, seen from sender to recipient

        Returns:
            The updated or newly created entry
        """
        entry = self._entries.get((sender_index, recipient_index))
        if entry is not None:
            return self._store(replace(entry, balance=entry.balance + amount))

        entry = self._entries.get((recipient_index, sender_index))
        if entry is not None:
            return self._store(replace(entry, balance=entry.balance - amount))

        entry = self._store(
            BalanceEntry(sender_index=sender_index, recipient_index=recipient_index, balance=amount)
        )
        logger.debug("New balance entry %d -> %d", sender_index, recipient_index)
        return entry

    def _store(self, entry: BalanceEntry) -> BalanceEntry:
        self._entries[(entry.sender_index, entry.recipient_index)] = entry
        return entry

    def add_transaction(self, transaction: Transaction) -> BalanceEntry:
        """Fold an invoice or payment; its role decides the sign."""
        return self.apply(
            transaction.sender_index, transaction.recipient_index, transaction.signed_amount
        )

    def get_entry(self, first_index: int, second_index: int) -> Optional[BalanceEntry]:
        """Return the entry for a pair in either orientation, or None."""
        entry = self._entries.get((first_index, second_index))
        if entry is None:
            entry = self._entries.get((second_index, first_index))
        return entry

    def net(self, sender_index: int, recipient_index: int) -> Decimal:
        """Return the pair's balance seen from sender to recipient (0 if unseen)."""
        entry = self._entries.get((sender_index, recipient_index))
        if entry is not None:
            return entry.balance
        entry = self._entries.get((recipient_index, sender_index))
        if entry is not None:
            return -entry.balance
        return Decimal("0")

    def entries_for(self, account_index: int) -> list[BalanceEntry]:
        return [entry for entry in self._entries.values() if entry.involves(account_index)]

    @property
    def entries(self) -> tuple[BalanceEntry, ...]:
        return tuple(self._entries.values())

    def __iter__(self) -> Iterator[BalanceEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._entries)


def compute_balance(invoices: Iterable[Transaction], payments: Iterable[Transaction]) -> Balance:
    """Fold all invoices, then all payments, into a new Balance."""
    balance = Balance()
    for invoice in invoices:
        balance.add_transaction(invoice)
    for payment in payments:
        balance.add_transaction(payment)
    return balance


def compute_ledger_balance(ledger: Ledger) -> Balance:
    return compute_balance(ledger.invoices, ledger.payments)
