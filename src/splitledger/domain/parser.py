"""Ledger text parser."""

import logging
import re
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from splitledger.domain.account import AccountRegistry
from splitledger.domain.entities import Ledger, ParserOptions, Transaction, TransactionRole
from splitledger.domain.errors import (
    ConflictError,
    LedgerSyntaxError,
    NotFoundError,
    malformed_line,
    missing_header,
    on_line,
)
from splitledger.domain.recurrence import expand_occurrences, parse_period
from splitledger.utils.amount_parser import AMOUNT_PATTERN, parse_amount
from splitledger.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

_ACRONYM = r"[A-Z]{2}"
_DATE = r"[0-9]{1,2}\.[0-9]{1,2}\.[0-9]{4}"

BLANK_RE = re.compile(r"^$")
COMMENT_RE = re.compile(r"^//")
ACCOUNT_RE = re.compile(rf"^account\s(?P<acronym>{_ACRONYM})\s(?P<name>.+)$")
INVOICE_RE = re.compile(
    r"^invoice\s"
    rf"(?P<parties>{_ACRONYM}(?:\s:\s{_ACRONYM})*(?:\s->\s{_ACRONYM})+)\s"
    rf"{AMOUNT_PATTERN}\s"
    rf"(?P<start>{_DATE})"
    rf"(?:\s-\s(?P<end>{_DATE})\s:\s(?P<period>{_DATE}))?"
    r"\s(?P<note>.+)$"
)
PAYMENT_RE = re.compile(
    rf"^payment\s(?P<sender>{_ACRONYM})\s->\s(?P<recipient>{_ACRONYM})\s"
    rf"{AMOUNT_PATTERN}\s"
    rf"(?P<date>{_DATE})"
    r"\s(?P<note>.+)$"
)

_LINE_BREAK = re.compile(r"\r?\n")
_RECIPIENT_SEPARATOR = re.compile(r"\s->\s")
_SENDER_SEPARATOR = re.compile(r"\s:\s")


class _LedgerBuilder:
    """Mutable state while a single document is parsed."""

    def __init__(self, reference_date: date, merge_duplicate_invoices: bool):
        self.reference_date = reference_date
        self.merge_duplicate_invoices = merge_duplicate_invoices
        self.accounts = AccountRegistry()
        self.invoices: list[Transaction] = []
        self.payments: list[Transaction] = []

    def add_invoice(
        self, sender_index: int, recipient_index: int, amount: Decimal, when: date, note: str
    ) -> None:
        if sender_index == recipient_index:
            logger.debug("Dropping invoice from account %d to itself on %s", sender_index, when)
            return

        if self.merge_duplicate_invoices:
            sender_index, recipient_index, amount = self._merge(
                sender_index, recipient_index, amount, when, note
            )

        self.invoices.append(
            Transaction(
                sender_index=sender_index,
                recipient_index=recipient_index,
                amount=amount,
                date=when,
                note=note,
                role=TransactionRole.INVOICE,
            )
        )

    def _merge(
        self, sender_index: int, recipient_index: int, amount: Decimal, when: date, note: str
    ) -> tuple[int, int, Decimal]:
        """Fold an existing invoice for the same pair, date and note into a new one."""
        for position, existing in enumerate(self.invoices):
            if existing.date != when or existing.note != note:
                continue
            if existing.sender_index == sender_index and existing.recipient_index == recipient_index:
                amount += existing.amount
            elif existing.sender_index == recipient_index and existing.recipient_index == sender_index:
                amount -= existing.amount
            else:
                continue

            del self.invoices[position]
            logger.debug("Merged invoice '%s' on %s into a new total of %s", note, when, amount)
            if amount < 0:
                return recipient_index, sender_index, -amount
            return sender_index, recipient_index, amount

        return sender_index, recipient_index, amount

    def add_payment(
        self, sender_index: int, recipient_index: int, amount: Decimal, when: date, note: str
    ) -> None:
        if sender_index == recipient_index:
            logger.debug("Dropping payment from account %d to itself on %s", sender_index, when)
            return

        self.payments.append(
            Transaction(
                sender_index=sender_index,
                recipient_index=recipient_index,
                amount=amount,
                date=when,
                note=note,
                role=TransactionRole.PAYMENT,
            )
        )

    def build(self) -> Ledger:
        self.accounts.freeze()
        return Ledger(
            reference_date=self.reference_date,
            accounts=self.accounts,
            invoices=tuple(self.invoices),
            payments=tuple(self.payments),
        )


class LedgerParser:
    """Parser turning ledger text into a Ledger.

    The first line is the header with the reference date. Every other line is
    matched against the rules blank, comment, account, invoice and payment, in
    that order; the first matching rule handles the line.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """Initialize ledger parser.

        Args:
            options: Parser policies (defaults to ParserOptions())
        """
        self.options = options or ParserOptions()
        self.header_re = re.compile(
            rf"^{re.escape(self.options.header_keyword)}\s(?P<date>{_DATE})$"
        )
        self.rules: tuple[tuple[re.Pattern, Callable[[_LedgerBuilder, re.Match], None]], ...] = (
            (BLANK_RE, self._skip_line),
            (COMMENT_RE, self._skip_line),
            (ACCOUNT_RE, self._parse_account),
            (INVOICE_RE, self._parse_invoice),
            (PAYMENT_RE, self._parse_payment),
        )

    def parse(self, text: str) -> Ledger:
        """Parse a ledger document.

        Args:
            text: Full ledger text

        Returns:
            Parsed Ledger

        Raises:
            LedgerSyntaxError: If a line is malformed or holds an invalid value
            NotFoundError: If a line references an undeclared account
            ConflictError: If an account acronym is declared twice
        """
        # Only "\n" ends a line; notes may hold any other control character
        lines = _LINE_BREAK.split(text)
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()

        builder = _LedgerBuilder(
            reference_date=self._parse_header(lines[0]),
            merge_duplicate_invoices=self.options.merge_duplicate_invoices,
        )

        for line_number, line in enumerate(lines[1:], start=2):
            try:
                self._parse_line(builder, line_number, line)
            except LedgerSyntaxError:
                raise
            except (NotFoundError, ConflictError) as e:
                raise type(e)(on_line(line_number, line, str(e))) from e
            except ValueError as e:
                raise LedgerSyntaxError(on_line(line_number, line, str(e)), line_number, line) from e

        ledger = builder.build()
        logger.debug(
            "Parsed ledger with %d accounts, %d invoices and %d payments up to %s",
            len(ledger.accounts),
            len(ledger.invoices),
            len(ledger.payments),
            ledger.reference_date,
        )
        return ledger

    def _parse_header(self, line: str) -> date:
        match = self.header_re.match(line)
        if match is None:
            raise LedgerSyntaxError(
                on_line(1, line, missing_header(self.options.header_keyword)), 1, line
            )
        try:
            return parse_date(match.group("date"))
        except ValueError as e:
            raise LedgerSyntaxError(on_line(1, line, str(e)), 1, line) from e

    def _parse_line(self, builder: _LedgerBuilder, line_number: int, line: str) -> None:
        for pattern, handler in self.rules:
            match = pattern.match(line)
            if match is not None:
                handler(builder, match)
                return
        raise LedgerSyntaxError(malformed_line(line_number, line), line_number, line)

    def _skip_line(self, builder: _LedgerBuilder, match: re.Match) -> None:
        pass

    def _parse_account(self, builder: _LedgerBuilder, match: re.Match) -> None:
        builder.accounts.add_account(match.group("acronym"), match.group("name"))

    def _parse_invoice(self, builder: _LedgerBuilder, match: re.Match) -> None:
        # Unknown acronyms fail even on invoices after the reference date
        sender_part, *recipient_parts = _RECIPIENT_SEPARATOR.split(match.group("parties"))
        sender_indices = [
            builder.accounts.resolve(acronym) for acronym in _SENDER_SEPARATOR.split(sender_part)
        ]
        recipient_indices = [builder.accounts.resolve(acronym) for acronym in recipient_parts]

        start = parse_date(match.group("start"))
        end = None
        period = None
        if match.group("end") is not None:
            end = parse_date(match.group("end"))
            period = parse_period(
                match.group("period"), legacy_years=self.options.legacy_period_years
            )

        note = match.group("note")
        if start > builder.reference_date:
            logger.debug("Ignoring invoice '%s' starting %s after reference date", note, start)
            return

        total_amount = parse_amount(match.group("amount"))
        amount_per_sender = total_amount / len(sender_indices)

        for when in expand_occurrences(start, end, period, builder.reference_date):
            for sender_index in sender_indices:
                builder.add_invoice(sender_index, recipient_indices[0], amount_per_sender, when, note)
            # Each recipient forwards the full amount to the next one in the chain
            for previous_index, next_index in zip(recipient_indices, recipient_indices[1:]):
                builder.add_invoice(previous_index, next_index, total_amount, when, note)

    def _parse_payment(self, builder: _LedgerBuilder, match: re.Match) -> None:
        sender_index = builder.accounts.resolve(match.group("sender"))
        recipient_index = builder.accounts.resolve(match.group("recipient"))
        when = parse_date(match.group("date"))
        note = match.group("note")
        if when > builder.reference_date:
            logger.debug("Ignoring payment '%s' dated %s after reference date", note, when)
            return

        builder.add_payment(
            sender_index, recipient_index, parse_amount(match.group("amount")), when, note
        )


def parse_ledger(text: str, options: Optional[ParserOptions] = None) -> Ledger:
    """Parse ledger text with the given options."""
    return LedgerParser(options).parse(text)


def load_ledger(path: str | Path, options: Optional[ParserOptions] = None) -> Ledger:
    """Read a UTF-8 ledger file and parse it.

    Raises:
        OSError: If the file cannot be read
    """
    text = Path(path).read_text(encoding="utf-8")
    logger.debug("Read ledger file %s", path)
    return parse_ledger(text, options)
