"""
Keygen - Create a new account credential.

Generates 128 bits of entropy, encodes a 12-word mnemonic, derives the
``secret1...`` address and writes ``{"mnemonic", "address"}`` to the
credential file.  Fund the address from the testnet faucet before deploying:
https://faucet.secrettestnet.io/
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ..sigil.keys import Credential, generate, load, Present
from .common import resolve_settings


@click.command()
@click.option(
    "--keys",
    "keys_file",
    envvar="SIBYL_KEYS_FILE",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Credential file to write (default: keys.json)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing credential file")
def keygen(keys_file: Optional[Path], force: bool) -> None:
    """Generate a mnemonic and Secret Network address."""
    settings = resolve_settings(keys_file=keys_file)

    if not force and isinstance(load(settings.keys_file), Present):
        click.secho(
            f"Credential already exists at {settings.keys_file} (use --force to replace it).",
            fg="yellow",
        )
        sys.exit(0)

    data = generate(path=settings.keys_file)

    if isinstance(data, Credential):
        click.echo(json.dumps({"data": data.to_dict()}, indent=2))
        click.echo()
        click.secho(f"  Saved to {settings.keys_file}", dim=True)
        click.secho(
            "  IMPORTANT: Back up the mnemonic. Loss is irreversible.",
            fg="yellow",
            bold=True,
        )
    else:
        click.echo(json.dumps({"data": data}))

    sys.exit(0)
