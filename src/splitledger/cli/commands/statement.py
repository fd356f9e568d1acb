"""Statement commands."""

from pathlib import Path

import click

from splitledger.cli.error_handling import handle_domain_error
from splitledger.cli.ledger_loading import load_ledger_or_exit
from splitledger.domain.account import AccountRegistry
from splitledger.domain.entities import Statement, Transaction
from splitledger.domain.errors import DomainError
from splitledger.domain.statement import StatementService
from splitledger.utils.amount_parser import format_amount
from splitledger.utils.date_parser import format_date

NAME_COLUMN = 15
AMOUNT_COLUMN = 35
NOTE_COLUMN = 50

TO = "To"
FROM = "From"


def statement_title(statement: Statement) -> str:
    return f"Statement {format_date(statement.reference_date)} {statement.account.name}"


def statement_filename(statement: Statement) -> str:
    """File name for a statement: the title with dots replaced, as a .txt file."""
    return statement_title(statement).replace(".", "_") + ".txt"


def _transaction_lines(
    title: str,
    preposition: str,
    transactions: tuple[Transaction, ...],
    accounts: AccountRegistry,
    currency: str,
) -> list[str]:
    if not transactions:
        return []

    lines = ["", f"{title}:"]
    for txn in transactions:
        other_index = txn.sender_index if preposition == FROM else txn.recipient_index
        line = format_date(txn.date).ljust(NAME_COLUMN - len(preposition))
        line += f"{preposition} {accounts[other_index].name}"
        line = line.ljust(AMOUNT_COLUMN) + format_amount(txn.amount, currency)
        line = line.ljust(NOTE_COLUMN) + txn.note
        lines.append(line)
    return lines


def render_statement(statement: Statement, accounts: AccountRegistry, currency: str) -> str:
    """Render a statement as plain text.

    Sections without transactions are left out. The outstanding section lists
    who owes whom, or "-" when everything is settled.
    """
    lines = [statement_title(statement)]
    lines += _transaction_lines("To pay", TO, statement.to_pay, accounts, currency)
    lines += _transaction_lines("Credited", FROM, statement.credited, accounts, currency)
    lines += _transaction_lines("Paid", TO, statement.paid, accounts, currency)
    lines += _transaction_lines("Received", FROM, statement.received, accounts, currency)

    lines += ["", "Outstanding:"]
    for debt in statement.outstanding:
        line = f"{accounts[debt.debtor_index].name} -> {accounts[debt.creditor_index].name}"
        lines.append(line.ljust(AMOUNT_COLUMN) + format_amount(debt.amount, currency))
    if statement.is_settled:
        lines.append("-")

    return "\n".join(lines) + "\n"


@click.command("statement")
@click.argument("ledger_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("acronyms", nargs=-1, required=True)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    help="Directory for statement files (default: the ledger file's directory)",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print statements instead of writing files")
@click.pass_context
def statement(ctx, ledger_file: str, acronyms: tuple[str, ...], output_dir: str, to_stdout: bool):
    """Write a statement for each ACRONYMS account in LEDGER_FILE."""
    ledger, balance = load_ledger_or_exit(ctx, ledger_file)
    service = StatementService(ledger, balance)
    currency = ctx.obj["currency"]

    statements = []
    for acronym in acronyms:
        try:
            statements.append(service.build_statement(acronym))
        except DomainError as e:
            handle_domain_error(ctx, e)

    if to_stdout:
        for i, stmt in enumerate(statements):
            if i > 0:
                click.echo()
            click.echo(render_statement(stmt, ledger.accounts, currency), nl=False)
        return

    directory = Path(output_dir) if output_dir else Path(ledger_file).parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
        for stmt in statements:
            path = directory / statement_filename(stmt)
            path.write_text(render_statement(stmt, ledger.accounts, currency), encoding="utf-8")
            click.echo(f"Wrote statement for {stmt.account.acronym} to {path}")
    except OSError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register statement command with main CLI."""
    cli.add_command(statement)
