"""
Submit - Record a score on the contract.

The contract replies with a human-readable message; the submission counts
as successful when it contains "Score recorded".
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..pneuma.client import ChainClientError, build_client
from ..pneuma.interaction import InteractionWorkflow
from ..pneuma.records import RecordError
from ..sigil.keys import Absent, load
from .common import chain_options, contract_option, fail, require_contract, resolve_settings


@click.command()
@chain_options
@contract_option
@click.option("--score", required=True, type=click.IntRange(min=0), help="Score value")
@click.option("--description", required=True, help="Human-readable explanation of the score")
def submit(
    lcd_url: Optional[str],
    chain_id: Optional[str],
    keys_file: Optional[Path],
    contract_file: Optional[Path],
    score: int,
    description: str,
) -> None:
    """Submit a score record."""
    settings = resolve_settings(
        lcd_url=lcd_url, chain_id=chain_id, keys_file=keys_file, contract_file=contract_file
    )
    identity = load(settings.keys_file)
    if isinstance(identity, Absent):
        return

    workflow = InteractionWorkflow(settings, client_factory=build_client)
    try:
        outcome = workflow.submit_score(
            identity, require_contract(settings), score, description
        )
    except (ChainClientError, RecordError) as exc:
        fail(str(exc), exc.exit_code)
    except Exception as exc:
        fail(f"Submission failed: {exc}")

    if outcome is not None and outcome.recorded:
        click.secho("Score Submission Successful!", fg="green", bold=True)
