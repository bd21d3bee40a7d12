"""
Query - Read contract state for the configured account.

- query: the caller's score record (status, score, description, date)
- stats: number of stored scores and the contract's max_size
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..pneuma.client import ChainClientError, build_client
from ..pneuma.interaction import InteractionWorkflow, format_timestamp
from ..pneuma.records import RecordError
from ..sigil.keys import Absent, load
from .common import chain_options, contract_option, fail, require_contract, resolve_settings


@click.command()
@chain_options
@contract_option
@click.option("--locale", envvar="SIBYL_LOCALE", default=None, help="Date locale (default: en-US)")
def query(
    lcd_url: Optional[str],
    chain_id: Optional[str],
    keys_file: Optional[Path],
    contract_file: Optional[Path],
    locale: Optional[str],
) -> None:
    """Query your score on the contract."""
    settings = resolve_settings(
        lcd_url=lcd_url,
        chain_id=chain_id,
        keys_file=keys_file,
        contract_file=contract_file,
        locale=locale,
    )
    identity = load(settings.keys_file)
    if isinstance(identity, Absent):
        return

    workflow = InteractionWorkflow(settings, client_factory=build_client)
    try:
        result = workflow.query_score(identity, require_contract(settings))
    except (ChainClientError, RecordError) as exc:
        fail(str(exc), exc.exit_code)
    except Exception as exc:
        fail(f"Query failed: {exc}")

    if result is None:
        return

    click.secho("Score Query Response:", fg="green", bold=True)
    click.secho(f"Status:  {result.status}", fg="green")
    click.secho(f"Score:  {result.score}", fg="green")
    click.secho(f"Description: {result.description}", fg="green")
    if result.timestamp is not None:
        date = format_timestamp(result.timestamp, settings.locale)
    else:
        date = "never"
    click.secho(f"Date Submitted: {date}", fg="green")


@click.command()
@chain_options
@contract_option
def stats(
    lcd_url: Optional[str],
    chain_id: Optional[str],
    keys_file: Optional[Path],
    contract_file: Optional[Path],
) -> None:
    """Show how many scores the contract holds."""
    settings = resolve_settings(
        lcd_url=lcd_url, chain_id=chain_id, keys_file=keys_file, contract_file=contract_file
    )
    identity = load(settings.keys_file)
    if isinstance(identity, Absent):
        return

    workflow = InteractionWorkflow(settings, client_factory=build_client)
    try:
        result = workflow.query_stats(identity, require_contract(settings))
    except (ChainClientError, RecordError) as exc:
        fail(str(exc), exc.exit_code)
    except Exception as exc:
        fail(f"Query failed: {exc}")

    if result is None:
        return

    click.secho("Contract Stats:", fg="green", bold=True)
    click.echo(f"  Scores stored: {result.score_count}")
    click.echo(f"  Max size:      {result.max_size}")
