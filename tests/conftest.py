"""Shared fixtures: credential, temp settings and on-disk files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sibyl.config import Settings
from sibyl.sigil.keys import Credential

from tests.fakes import TEST_ADDRESS, TEST_MNEMONIC


@pytest.fixture()
def credential() -> Credential:
    return Credential(mnemonic=TEST_MNEMONIC, address=TEST_ADDRESS)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    wasm = tmp_path / "contract.wasm"
    wasm.write_bytes(b"\x00asm\x01\x00\x00\x00")
    return Settings(
        lcd_url="http://localhost:1317/",
        chain_id="secretdev-1",
        keys_file=tmp_path / "keys.json",
        contract_file=tmp_path / "contract.json",
        wasm_file=wasm,
    )


@pytest.fixture()
def keys_file(settings: Settings, credential: Credential) -> Path:
    settings.keys_file.write_text(json.dumps(credential.to_dict()), encoding="utf-8")
    return settings.keys_file


@pytest.fixture()
def contract_file(settings: Settings) -> Path:
    settings.contract_file.write_text(
        json.dumps({"contractAddress": "secret1deployed0000000000000000000000000000"}),
        encoding="utf-8",
    )
    return settings.contract_file
