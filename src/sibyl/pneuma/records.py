"""
Local files consumed by the contract workflows.

- contract.json: ``{"contractAddress": "secret1...", ...}`` written after deploy
- contract.wasm: compiled contract bytecode
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


class RecordError(RuntimeError):
    exit_code: int = 1


@dataclass(frozen=True)
class ContractRecord:
    """
    Reference to a deployed contract.

    Only the presence of ``contract_address`` is checked; any other keys
    found in the file are kept in ``extra``.
    """
    contract_address: str
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "contractAddress": self.contract_address}


def load_contract_record(path: Path) -> Optional[ContractRecord]:
    """Read a contract record.  Returns None if the file is missing."""
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise RecordError(f"Could not read contract record {path}: {exc}") from exc

    if not isinstance(data, dict) or not data.get("contractAddress"):
        raise RecordError(f"contractAddress missing from {path}")

    extra = {k: v for k, v in data.items() if k != "contractAddress"}
    return ContractRecord(contract_address=str(data["contractAddress"]), extra=extra)


def save_contract_record(record: ContractRecord, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record.to_dict(), indent=2) + "\n", encoding="utf-8")
    return path


def read_bytecode(path: Path) -> bytes:
    """Read compiled contract bytecode."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise RecordError(f"Could not read contract bytecode {path}: {exc}") from exc
