"""
Configuration for the Sibyl CLI.

Settings are resolved once per invocation and handed to each workflow
explicitly.  Resolution order (later wins):

1. Hardcoded testnet defaults (``_DEFAULTS``)
2. ``.env`` in the working directory (python-dotenv)
3. Process environment
4. Command-line options (click ``envvar=`` options pass their value in)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv


# ---- Hardcoded defaults (Secret Network testnet) ----
_DEFAULTS: dict[str, str] = {
    "SIBYL_LCD_URL": "http://testnet.securesecrets.org:1317/",
    "SIBYL_CHAIN_ID": "pulsar-2",
    "SIBYL_KEYS_FILE": "keys.json",
    "SIBYL_CONTRACT_FILE": "contract.json",
    "SIBYL_WASM_FILE": "contract.wasm",
    "SIBYL_LOCALE": "en-US",
}

DENOM = "uscrt"
BECH32_PREFIX = "secret"
MAX_SIZE = 1000


@dataclass(frozen=True)
class Coin:
    amount: str
    denom: str = DENOM

    def to_dict(self) -> dict[str, str]:
        return {"amount": self.amount, "denom": self.denom}


@dataclass(frozen=True)
class Fee:
    """
    Fee for one kind of transaction.

    Attributes:
        amount: Coins paid (numeric strings, as the chain expects)
        gas: Gas limit as a numeric string
    """
    amount: tuple[Coin, ...]
    gas: str

    @classmethod
    def of(cls, amount: int, gas: int, denom: str = DENOM) -> "Fee":
        return cls(amount=(Coin(str(amount), denom),), gas=str(gas))

    @property
    def gas_limit(self) -> int:
        return int(self.gas)

    def coins(self) -> str:
        """Coins in the SDK's compact string form, e.g. ``"500000uscrt"``."""
        return ",".join(f"{c.amount}{c.denom}" for c in self.amount)

    def to_dict(self) -> dict[str, Any]:
        return {"amount": [c.to_dict() for c in self.amount], "gas": self.gas}


@dataclass(frozen=True)
class FeeSchedule:
    upload: Fee = Fee.of(2_500_000, 10_000_000)
    init: Fee = Fee.of(2_500_000, 10_000_000)
    exec: Fee = Fee.of(500_000, 500_000)
    send: Fee = Fee.of(80_000, 80_000)

    def to_dict(self) -> dict[str, Any]:
        return {
            "upload": self.upload.to_dict(),
            "init": self.init.to_dict(),
            "exec": self.exec.to_dict(),
            "send": self.send.to_dict(),
        }


@dataclass(frozen=True)
class Settings:
    """
    Immutable per-invocation configuration.

    Attributes:
        lcd_url: Base URL of the network's LCD (REST) gateway
        chain_id: Chain ID the client signs for
        keys_file: Credential file (``{"mnemonic", "address"}``)
        contract_file: Contract record file (``{"contractAddress"}``)
        wasm_file: Compiled contract bytecode
        locale: Locale used for date display
        fees: Per-operation fee schedule
        max_size: ``max_size`` sent in the contract's init message
    """
    lcd_url: str
    chain_id: str
    keys_file: Path
    contract_file: Path
    wasm_file: Path
    locale: str = "en-US"
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    max_size: int = MAX_SIZE


def load_settings(
    env_path: Optional[Path] = None,
    **overrides: Any,
) -> Settings:
    """
    Build Settings from defaults, ``.env`` and the environment.

    Args:
        env_path: Path to a .env file (default: ./.env, if present)
        **overrides: Explicit values (e.g. from CLI options); ``None`` is ignored

    Returns:
        Settings instance
    """
    env_path = env_path or Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)

    def _get(key: str) -> str:
        return os.environ.get(key) or _DEFAULTS[key]

    values: dict[str, Any] = {
        "lcd_url": _get("SIBYL_LCD_URL"),
        "chain_id": _get("SIBYL_CHAIN_ID"),
        "keys_file": Path(_get("SIBYL_KEYS_FILE")),
        "contract_file": Path(_get("SIBYL_CONTRACT_FILE")),
        "wasm_file": Path(_get("SIBYL_WASM_FILE")),
        "locale": _get("SIBYL_LOCALE"),
    }

    for key, value in overrides.items():
        if value is None:
            continue
        if key not in values and key not in ("fees", "max_size"):
            raise TypeError(f"Unknown setting: {key}")
        if key.endswith("_file"):
            value = Path(value)
        values[key] = value

    return Settings(**values)
