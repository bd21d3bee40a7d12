"""Options and error reporting shared by the commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional

import click

from ..config import Settings, load_settings
from ..pneuma.records import ContractRecord, load_contract_record


def chain_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Endpoint and key-file options (values fall back to .env / defaults)."""
    options = [
        click.option("--lcd-url", envvar="SIBYL_LCD_URL", default=None, help="Secret Network LCD URL"),
        click.option("--chain-id", envvar="SIBYL_CHAIN_ID", default=None, help="Chain ID"),
        click.option(
            "--keys",
            "keys_file",
            envvar="SIBYL_KEYS_FILE",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help="Credential file (default: keys.json)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def contract_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--contract",
        "contract_file",
        envvar="SIBYL_CONTRACT_FILE",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Contract record file (default: contract.json)",
    )(func)


def resolve_settings(**overrides: Optional[Any]) -> Settings:
    return load_settings(**overrides)


def require_contract(settings: Settings) -> ContractRecord:
    record = load_contract_record(settings.contract_file)
    if record is None:
        fail(
            f"Contract record not found: {settings.contract_file}. "
            f"Run 'sibyl deploy' first."
        )
    return record


def fail(message: str, exit_code: int = 1) -> NoReturn:
    click.secho(f"ERROR: {message}", fg="red", err=True)
    sys.exit(exit_code)
