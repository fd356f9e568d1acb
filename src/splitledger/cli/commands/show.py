"""Ledger overview command."""

from decimal import Decimal

import click

from splitledger.cli.ledger_loading import load_ledger_or_exit
from splitledger.domain.balance import Balance
from splitledger.domain.entities import Ledger, Transaction
from splitledger.utils.amount_parser import format_amount, round_to_cents
from splitledger.utils.date_parser import format_date


def format_signed_amount(amount: Decimal, currency: str) -> str:
    sign = "-" if round_to_cents(amount) < 0 else ""
    return sign + format_amount(abs(amount), currency)


def _transaction_line(txn: Transaction, ledger: Ledger, currency: str) -> str:
    accounts = ledger.accounts
    return (
        f"{accounts[txn.sender_index].acronym} -> {accounts[txn.recipient_index].acronym} "
        f"{format_amount(txn.amount, currency)}\t{format_date(txn.date)}\t{txn.note}"
    )


def render_overview(ledger: Ledger, balance: Balance, currency: str) -> str:
    """Render the parsed ledger and its balance as plain text."""
    lines = [f"Accounting date {format_date(ledger.reference_date)}", "", "Accounts:"]
    lines += [f"{account.acronym} -> {account.name}" for account in ledger.accounts]

    lines += ["", "Invoices:"]
    lines += [_transaction_line(txn, ledger, currency) for txn in ledger.invoices]

    lines += ["", "Payments:"]
    lines += [_transaction_line(txn, ledger, currency) for txn in ledger.payments]

    lines += ["", "Balance:"]
    for entry in balance.entries:
        sender = ledger.accounts[entry.sender_index].acronym
        recipient = ledger.accounts[entry.recipient_index].acronym
        lines.append(f"{sender} -> {recipient} {format_signed_amount(entry.balance, currency)}")

    return "\n".join(lines) + "\n"


@click.command("show")
@click.argument("ledger_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def show(ctx, ledger_file: str):
    """Show accounts, transactions and balance of LEDGER_FILE."""
    ledger, balance = load_ledger_or_exit(ctx, ledger_file)
    click.echo(render_overview(ledger, balance, ctx.obj["currency"]), nl=False)


def register_commands(cli):
    """Register show command with main CLI."""
    cli.add_command(show)
