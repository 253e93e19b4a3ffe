"""appsheet CLI - youngest users with valid phone numbers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Sequence

import requests
import typer
from dotenv import find_dotenv, load_dotenv

from . import __version__
from .client import ServerError, UserServiceClient
from .collector import PaginationLimitError, run
from .config import load_settings
from .phone import is_valid_phone_number

app = typer.Typer(help="List the youngest users with valid US phone numbers", no_args_is_help=True)


def version_callback(v: bool) -> None:
    if v:
        typer.echo(f"v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "-v", "--version", is_eager=True, callback=version_callback
    )
) -> None:
    # Load environment variables from .env in the working directory if it exists
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
        force=True,
    )


@app.command("run")
def run_command(
    base_url: Annotated[
        str | None, typer.Option("--base-url", help="User service base URL")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to a YAML settings file")
    ] = None,
    count: Annotated[
        int | None, typer.Option("--count", "-n", help="Number of youngest users to print")
    ] = None,
    max_pages: Annotated[
        int | None,
        typer.Option("--max-pages", help="Fail after this many pages (default: no limit)"),
    ] = None,
    timeout: Annotated[
        float | None, typer.Option("--timeout", help="Per-request timeout in seconds")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log requests and pages to stderr")
    ] = False,
) -> None:
    """Fetch all users and print the youngest ones with valid phone numbers."""
    _configure_logging(verbose)

    try:
        settings = load_settings(
            config_path=config,
            base_url=base_url,
            count=count,
            max_pages=max_pages,
            timeout=timeout,
        )
        with UserServiceClient(settings.base_url, timeout=settings.timeout) as client:
            lines = run(client, count=settings.count, max_pages=settings.max_pages)
    except (ServerError, PaginationLimitError, requests.RequestException, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    for line in lines:
        typer.echo(line)


@app.command("check-phone", no_args_is_help=True)
def check_phone(
    numbers: Annotated[list[str], typer.Argument(help="Phone numbers to check")],
) -> None:
    """Report whether each phone number passes validation."""
    all_valid = True
    for number in numbers:
        valid = is_valid_phone_number(number)
        all_valid = all_valid and valid
        typer.echo(f"{number}: {'valid' if valid else 'invalid'}")
    if not all_valid:
        raise typer.Exit(1)


def main(argv: Sequence[str] | None = None) -> int | None:
    return app(
        args=list(argv) if argv is not None else None,
        standalone_mode=False,
    )
