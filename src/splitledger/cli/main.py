"""Main CLI entry point."""

import logging

import click

from splitledger.domain.entities import DEFAULT_HEADER_KEYWORD, ParserOptions
from splitledger.utils.amount_parser import DEFAULT_CURRENCY

# Import and register all commands at module level
from splitledger.cli.commands import show, statement


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log parsing details to stderr")
@click.option(
    "--header-keyword",
    default=DEFAULT_HEADER_KEYWORD,
    show_default=True,
    envvar="SPLITLEDGER_HEADER_KEYWORD",
    help="Keyword of the ledger's first line",
)
@click.option(
    "--merge-invoices",
    is_flag=True,
    envvar="SPLITLEDGER_MERGE_INVOICES",
    help="Merge invoices between the same accounts with the same date and note",
)
@click.option(
    "--legacy-period-years",
    is_flag=True,
    envvar="SPLITLEDGER_LEGACY_PERIOD_YEARS",
    help="Read the years of a recurrence period from its day field",
)
@click.option(
    "--currency",
    default=DEFAULT_CURRENCY,
    show_default=True,
    envvar="SPLITLEDGER_CURRENCY",
    help="Currency suffix for amounts",
)
@click.pass_context
def cli(
    ctx,
    verbose: bool,
    header_keyword: str,
    merge_invoices: bool,
    legacy_period_years: bool,
    currency: str,
):
    """Splitledger - Shared household expense statements.

    Reads a plain-text ledger of accounts, invoices and payments, nets the
    debts between every pair of accounts and writes per-person statements.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.obj["options"] = ParserOptions(
        header_keyword=header_keyword,
        merge_duplicate_invoices=merge_invoices,
        legacy_period_years=legacy_period_years,
    )
    ctx.obj["currency"] = currency


# Register all commands
show.register_commands(cli)
statement.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
