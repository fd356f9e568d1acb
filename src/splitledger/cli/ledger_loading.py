"""CLI helpers for ledger loading and error handling."""

from __future__ import annotations

import click

from splitledger.cli.error_handling import handle_domain_error
from splitledger.domain.balance import Balance, compute_ledger_balance
from splitledger.domain.entities import Ledger
from splitledger.domain.errors import DomainError
from splitledger.domain.parser import load_ledger


def load_ledger_or_exit(ctx: click.Context, ledger_file: str) -> tuple[Ledger, Balance]:
    """Parse a ledger file and compute its balance, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        ledger = load_ledger(ledger_file, ctx.obj["options"])
    except (DomainError, OSError) as exc:
        handle_domain_error(ctx, exc)
    return ledger, compute_ledger_balance(ledger)
