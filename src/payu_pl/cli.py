"""payu-pl CLI - sign and verify PayU webhook notifications."""

from __future__ import annotations

import logging
import platform
import sys
from typing import IO

import click
import structlog
from rich.console import Console
from rich.table import Table

from payu_pl import __version__
from payu_pl.errors import ConfigurationError
from payu_pl.webhooks import (
    DEFAULT_ALGORITHM,
    BufferedRequest,
    WebhookProcessor,
    build_signature_header,
    order_summary,
)
from payu_pl.webhooks.request import SIGNATURE_HEADER
from payu_pl.webhooks.verifier import UnsupportedAlgorithmError

console = Console()


def _configure_logging(log_level: str) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
    )


@click.group()
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    envvar="PAYU_LOG_LEVEL",
    help="Log level (default: warning)",
)
def main(log_level: str) -> None:
    """payu-pl - PayU webhook tooling."""
    _configure_logging(log_level)


@main.command()
def version() -> None:
    """Show version information."""
    console.print(f"payu-pl Version: {__version__}")
    console.print(f"Python: {platform.python_version()}")


@main.command()
@click.argument("body", type=click.File("rb"))
@click.option("--secret", envvar="PAYU_SECOND_KEY", required=True, help="PayU second key")
@click.option(
    "--algorithm",
    "-a",
    default=DEFAULT_ALGORITHM,
    show_default=True,
    help="Signature algorithm (SHA256, SHA1, SHA384, SHA512, MD5)",
)
def sign(body: IO[bytes], secret: str, algorithm: str) -> None:
    """Print the OpenPayU-Signature header value for BODY (a file or -)."""
    try:
        header = build_signature_header(secret, body.read(), algorithm)
    except UnsupportedAlgorithmError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    click.echo(header)


@main.command()
@click.argument("body", type=click.File("rb"))
@click.option("--secret", envvar="PAYU_SECOND_KEY", default=None, help="PayU second key")
@click.option("--signature-header", "-s", required=True, help=f"{SIGNATURE_HEADER} header value")
@click.option("--verbose", "-v", is_flag=True, help="Log each verification step")
def verify(body: IO[bytes], secret: str | None, signature_header: str, verbose: bool) -> None:
    """Verify a notification BODY (a file or -) against its signature header."""
    try:
        processor = WebhookProcessor(
            secret=secret,
            logger=structlog.get_logger() if verbose else None,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)

    request = BufferedRequest(headers={SIGNATURE_HEADER: signature_header}, body=body.read())
    result = processor.validate_and_parse(request)

    if result.is_failure:
        console.print(f"[red]✗ Rejected:[/red] {result.error}")
        sys.exit(1)

    console.print("[green]✓ Signature verified[/green]")

    summary = order_summary(result.data)
    table = Table(title="Order")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Order ID", str(summary["order_id"] or "-"))
    table.add_row("Status", str(summary["status"] or "-"))
    amount = summary["amount"]
    table.add_row("Amount", f"{amount} {summary['currency_code'] or ''}".strip() if amount else "-")
    console.print(table)


if __name__ == "__main__":
    main()
