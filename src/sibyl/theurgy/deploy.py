"""
Deploy - Upload the score contract and create an instance.

Prints the resulting contract record as JSON.  With ``--output`` the
record is also written to disk for ``sibyl query`` / ``sibyl submit``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from ..pneuma.bootstrap import BootstrapWorkflow
from ..pneuma.client import ChainClientError, build_client
from ..pneuma.records import RecordError, save_contract_record
from ..sigil.keys import load
from .common import chain_options, fail, resolve_settings


@click.command()
@chain_options
@click.option(
    "--wasm",
    "wasm_file",
    envvar="SIBYL_WASM_FILE",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Compiled contract (default: contract.wasm)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the contract record to this file",
)
def deploy(
    lcd_url: Optional[str],
    chain_id: Optional[str],
    keys_file: Optional[Path],
    wasm_file: Optional[Path],
    output: Optional[Path],
) -> None:
    """Upload and instantiate the score contract."""
    settings = resolve_settings(
        lcd_url=lcd_url, chain_id=chain_id, keys_file=keys_file, wasm_file=wasm_file
    )

    workflow = BootstrapWorkflow(
        settings,
        client_factory=build_client,
        progress=lambda line: click.secho(f"  {line}", dim=True),
    )

    try:
        record = workflow.run(load(settings.keys_file))
    except (ChainClientError, RecordError) as exc:
        fail(str(exc), exc.exit_code)
    except Exception as exc:
        fail(f"Deploy failed: {exc}")

    if record is None:
        return

    click.echo(json.dumps(record.to_dict(), indent=2))
    if output is not None:
        save_contract_record(record, output)
        click.secho(f"  Contract record written to {output}", fg="green")
