"""
Sibyl CLI

Command-line interface for the Sibyl score-ledger contract on Secret Network.

Identity = mnemonic-derived secp256k1 key stored in keys.json.  Transaction
signing and payload encryption are handled by secret-sdk.

Commands:
  keygen  - Generate a mnemonic + address (keys.json)
  deploy  - Upload and instantiate the contract
  query   - Query your score
  stats   - Query contract statistics
  submit  - Submit a score record
  whoami  - Show current account address
  info    - Show configuration
"""

from __future__ import annotations

import sys

import click

from .config import load_settings
from .sigil.keys import Present, load


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="sibyl")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Sibyl: credit scores on Secret Network."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.keygen import keygen
from .theurgy.deploy import deploy
from .theurgy.query import query, stats
from .theurgy.submit import submit

cli.add_command(keygen)
cli.add_command(deploy)
cli.add_command(query)
cli.add_command(stats)
cli.add_command(submit)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show current account address."""
    identity = load(load_settings().keys_file)
    if isinstance(identity, Present):
        click.echo(f"Address: {identity.credential.address}")
    else:
        click.echo("No credential found.")
        click.echo("Run 'sibyl keygen' to create one.")
        sys.exit(1)


# ============ Info ============


@cli.command()
def info() -> None:
    """Show configuration."""
    settings = load_settings()
    identity = load(settings.keys_file)

    click.secho(f"  Sibyl v{VERSION}", bold=True)
    click.echo()

    rows = [
        ("LCD URL:  ", settings.lcd_url),
        ("Chain ID: ", settings.chain_id),
        ("Keys:     ", str(settings.keys_file)),
        ("Contract: ", str(settings.contract_file)),
        ("Bytecode: ", str(settings.wasm_file)),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + click.style(value, fg="bright_white"))

    if isinstance(identity, Present):
        address = click.style(identity.credential.address, fg="bright_white")
    else:
        address = click.style("not initialized", fg="yellow") + click.style(
            "  (run: sibyl keygen)", dim=True
        )
    click.echo(click.style("  Address:  ", dim=True) + address)

    click.echo()
    click.secho("  Fees ───────────────────────────────────", fg="cyan")
    for name, fee in settings.fees.to_dict().items():
        amount = ", ".join(f"{c['amount']}{c['denom']}" for c in fee["amount"])
        click.echo(f"  {name:<7} {amount}  (gas {fee['gas']})")
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """Sibyl CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
