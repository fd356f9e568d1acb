"""Per-account statement domain service."""

from splitledger.domain.balance import Balance
from splitledger.domain.entities import Debt, Ledger, Statement, Transaction
from splitledger.utils.amount_parser import CENT, round_to_cents


class StatementService:
    """Service for building account statements from a parsed ledger."""

    def __init__(self, ledger: Ledger, balance: Balance):
        """Initialize statement service.

        Args:
            ledger: Parsed ledger
            balance: Balance computed from the ledger
        """
        self.ledger = ledger
        self.balance = balance

    def build_statement(self, acronym: str) -> Statement:
        """Build the statement for one account.

        Args:
            acronym: Account acronym

        Returns:
            Statement with transactions sorted by date and open debts

        Raises:
            NotFoundError: If the acronym is not declared in the ledger
        """
        account_index = self.ledger.accounts.resolve(acronym)

        return Statement(
            account_index=account_index,
            account=self.ledger.accounts[account_index],
            reference_date=self.ledger.reference_date,
            to_pay=self._sorted(
                t for t in self.ledger.invoices if t.sender_index == account_index
            ),
            credited=self._sorted(
                t for t in self.ledger.invoices if t.recipient_index == account_index
            ),
            paid=self._sorted(
                t for t in self.ledger.payments if t.sender_index == account_index
            ),
            received=self._sorted(
                t for t in self.ledger.payments if t.recipient_index == account_index
            ),
            outstanding=tuple(self.get_outstanding_debts(account_index)),
        )

    def get_outstanding_debts(self, account_index: int) -> list[Debt]:
        """Return open debts involving an account, smallest signed balance first.

        Balances are rounded to cents; entries that round to less than one
        cent count as settled.
        """
        debts = []
        entries = sorted(self.balance.entries_for(account_index), key=lambda e: e.balance)
        for entry in entries:
            rounded = round_to_cents(entry.balance)
            if abs(rounded) < CENT:
                continue
            if rounded < 0:
                debtor_index, creditor_index = entry.sender_index, entry.recipient_index
            else:
                debtor_index, creditor_index = entry.recipient_index, entry.sender_index
            debts.append(
                Debt(debtor_index=debtor_index, creditor_index=creditor_index, amount=abs(rounded))
            )
        return debts

    @staticmethod
    def _sorted(transactions) -> tuple[Transaction, ...]:
        return tuple(sorted(transactions, key=lambda t: t.date))
