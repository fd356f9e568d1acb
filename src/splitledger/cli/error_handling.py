"""CLI error handling helpers."""

import click

from splitledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | OSError) -> None:
    """Render a domain or file error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
