"""
Key Material for the Sibyl CLI.

A credential is a BIP-39 mnemonic plus the ``secret1...`` account address
derived from it.  It is written once by ``sibyl keygen`` to a local JSON
file (``keys.json`` by default) and read by every other command.

Derivation (BIP-44 path m/44'/529'/0'/0/0, bech32 prefix ``secret``) is
done by the Secret Network SDK's ``MnemonicKey``; this module only encodes
the entropy and manages the file.

Dependencies: mnemonic (BIP-39 wordlist), secret-sdk (key derivation/signing)
"""

from __future__ import annotations

import json
import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from mnemonic import Mnemonic
from secret_sdk.key.mnemonic import MnemonicKey

from ..config import load_settings


ENTROPY_BYTES = 16  # 128 bits -> 12 words


class CredentialError(ValueError):
    pass


@dataclass(frozen=True)
class Credential:
    mnemonic: str
    address: str

    def to_dict(self) -> dict[str, str]:
        return {"mnemonic": self.mnemonic, "address": self.address}


@dataclass(frozen=True)
class Absent:
    """No identity configured; dependent commands do nothing."""


@dataclass(frozen=True)
class Present:
    credential: Credential


Identity = Union[Absent, Present]


def _keys_file(path: Optional[Path]) -> Path:
    return path if path is not None else load_settings().keys_file


def mnemonic_from_entropy(entropy: bytes) -> str:
    """Encode raw entropy as an English BIP-39 mnemonic."""
    if len(entropy) != ENTROPY_BYTES:
        raise CredentialError(
            f"Entropy must be {ENTROPY_BYTES} bytes, got {len(entropy)}"
        )
    return Mnemonic("english").to_mnemonic(entropy)


def signing_key(mnemonic: str) -> MnemonicKey:
    """SDK key for a mnemonic.  Its ``sign`` method is the signing callback."""
    return MnemonicKey(mnemonic=mnemonic)


def derive_address(mnemonic: str) -> str:
    """
    Derive the account address for a mnemonic.

    Deterministic: the same mnemonic always yields the same address.
    """
    return str(signing_key(mnemonic).acc_address)


def save_credential(credential: Credential, path: Optional[Path] = None) -> Path:
    """
    Write a credential to its JSON file.

    Args:
        credential: Credential to persist
        path: Target file (default: the configured keys file)

    Returns:
        Path to the written file
    """
    path = _keys_file(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(credential.to_dict()), encoding="utf-8")

    # Set secure permissions on Unix
    if os.name != "nt":
        path.chmod(0o600)

    return path


def generate(
    entropy: Optional[bytes] = None,
    path: Optional[Path] = None,
) -> Union[Credential, str]:
    """
    Generate a fresh credential and save it.

    Args:
        entropy: 16 bytes of entropy (default: drawn from ``secrets``)
        path: Credential file (default: the configured keys file)

    Returns:
        The new Credential, or an error message if anything failed.
        Errors are returned as data, never raised.
    """
    try:
        if entropy is None:
            entropy = secrets.token_bytes(ENTROPY_BYTES)
        mnemonic = mnemonic_from_entropy(entropy)
        credential = Credential(mnemonic=mnemonic, address=derive_address(mnemonic))
        save_credential(credential, path)
        return credential
    except Exception as exc:
        return str(exc) or "Unknown Error"


def load(path: Optional[Path] = None) -> Identity:
    """
    Read the credential file.

    A missing or unreadable file, or one without a mnemonic, is reported
    as ``Absent`` rather than raised.
    """
    path = _keys_file(path)
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return Absent()

    if not isinstance(data, dict) or not data.get("mnemonic"):
        return Absent()

    return Present(
        Credential(mnemonic=str(data["mnemonic"]), address=str(data.get("address", "")))
    )
