"""
CLI integration tests using Click's test runner.

The chain client is replaced by a recording fake, so no test needs network
access or a funded account.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sibyl.cli import cli
from sibyl.config import Settings

from tests.fakes import FakeClientFactory


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env(settings: Settings) -> dict[str, str]:
    """Environment pointing every file setting into the temp directory."""
    clean = {k: v for k, v in os.environ.items() if not k.startswith("SIBYL_")}
    clean.update(
        {
            "SIBYL_KEYS_FILE": str(settings.keys_file),
            "SIBYL_CONTRACT_FILE": str(settings.contract_file),
            "SIBYL_WASM_FILE": str(settings.wasm_file),
            "SIBYL_LCD_URL": settings.lcd_url,
            "SIBYL_CHAIN_ID": settings.chain_id,
        }
    )
    return clean


class TestVersionAndInfo:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_info(self, runner: CliRunner, env: dict[str, str]) -> None:
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "not initialized" in result.output
        assert "2500000uscrt" in result.output


class TestKeygen:
    def test_keygen_writes_keys(self, runner: CliRunner, env: dict[str, str], settings: Settings) -> None:
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["keygen"])

        assert result.exit_code == 0
        saved = json.loads(settings.keys_file.read_text(encoding="utf-8"))
        assert saved["address"].startswith("secret1")
        assert len(saved["mnemonic"].split()) == 12
        assert saved["address"] in result.output

    def test_keygen_keeps_existing(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path
    ) -> None:
        before = keys_file.read_text(encoding="utf-8")
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["keygen"])
        assert result.exit_code == 0
        assert "already exists" in result.output
        assert keys_file.read_text(encoding="utf-8") == before

    def test_keygen_error_is_reported_as_data(
        self, runner: CliRunner, env: dict[str, str]
    ) -> None:
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.sigil.keys.derive_address", side_effect=RuntimeError("boom")):
                result = runner.invoke(cli, ["keygen"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"data": "boom"}


class TestWhoami:
    def test_with_credential(self, runner: CliRunner, env: dict[str, str], keys_file: Path) -> None:
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 0
        assert "Address: secret1" in result.output

    def test_without_credential(self, runner: CliRunner, env: dict[str, str]) -> None:
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["whoami"])
        assert result.exit_code != 0
        assert "No credential found" in result.output


class TestDeploy:
    def test_deploy_prints_record(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path, tmp_path: Path
    ) -> None:
        factory = FakeClientFactory(contract_address="secret1fresh")
        output = tmp_path / "out" / "contract.json"
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.deploy.build_client", factory):
                result = runner.invoke(cli, ["deploy", "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert '"contractAddress": "secret1fresh"' in result.output
        assert json.loads(output.read_text(encoding="utf-8")) == {"contractAddress": "secret1fresh"}

    def test_deploy_instantiate_failure(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path
    ) -> None:
        factory = FakeClientFactory(fail_on="instantiate")
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.deploy.build_client", factory):
                result = runner.invoke(cli, ["deploy"])

        assert result.exit_code == 1
        assert "Could not instantiate contract" in result.output
        assert [name for name, _ in factory.calls] == ["upload", "instantiate"]

    def test_deploy_without_credential(self, runner: CliRunner, env: dict[str, str]) -> None:
        factory = FakeClientFactory()
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.deploy.build_client", factory):
                result = runner.invoke(cli, ["deploy"])
        assert result.exit_code == 0
        assert result.output == ""
        assert factory.clients == []


class TestQuery:
    def test_query_displays_score(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path, contract_file: Path
    ) -> None:
        factory = FakeClientFactory(
            query_response={
                "status": "Score retrieved successfully",
                "score": 581,
                "description": "FAIR",
                "timestamp": 0,
            }
        )
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.query.build_client", factory):
                result = runner.invoke(cli, ["query"])

        assert result.exit_code == 0, result.output
        assert "Score Query Response:" in result.output
        assert "581" in result.output
        assert "Date Submitted: 1/1/1970" in result.output
        assert len(factory.calls) == 1
        assert factory.calls[0][0] == "query_contract_smart"

    def test_query_without_credential_makes_no_call(
        self, runner: CliRunner, env: dict[str, str], contract_file: Path
    ) -> None:
        factory = FakeClientFactory()
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.query.build_client", factory):
                result = runner.invoke(cli, ["query"])
        assert result.exit_code == 0
        assert result.output == ""
        assert factory.clients == []

    def test_query_without_contract_record(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path
    ) -> None:
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.query.build_client", FakeClientFactory()):
                result = runner.invoke(cli, ["query"])
        assert result.exit_code == 1
        assert "sibyl deploy" in result.output

    def test_query_failure_exits_nonzero(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path, contract_file: Path
    ) -> None:
        factory = FakeClientFactory(fail_on="query_contract_smart")
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.query.build_client", factory):
                result = runner.invoke(cli, ["query"])
        assert result.exit_code == 1
        assert "Could not query score" in result.output

    def test_stats(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path, contract_file: Path
    ) -> None:
        factory = FakeClientFactory(query_response={"score_count": 2, "max_size": 1000})
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.query.build_client", factory):
                result = runner.invoke(cli, ["stats"])
        assert result.exit_code == 0, result.output
        assert "Scores stored: 2" in result.output


class TestSubmit:
    ARGS = ["submit", "--score", "400", "--description", "Your score is FAIR"]

    def test_submit_success(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path, contract_file: Path
    ) -> None:
        factory = FakeClientFactory(execute_data=b"Score recorded")
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.submit.build_client", factory):
                result = runner.invoke(cli, self.ARGS)

        assert result.exit_code == 0, result.output
        assert "Score Submission Successful!" in result.output
        name, (address, message) = factory.calls[0]
        assert name == "execute"
        assert message == {"record": {"score": 400, "description": "Your score is FAIR"}}

    def test_submit_without_confirmation(
        self, runner: CliRunner, env: dict[str, str], keys_file: Path, contract_file: Path
    ) -> None:
        factory = FakeClientFactory(execute_data=b"Something else")
        with patch.dict(os.environ, env, clear=True):
            with patch("sibyl.theurgy.submit.build_client", factory):
                result = runner.invoke(cli, self.ARGS)
        assert result.exit_code == 0
        assert "Successful" not in result.output

    def test_submit_requires_score(self, runner: CliRunner, env: dict[str, str]) -> None:
        with patch.dict(os.environ, env, clear=True):
            result = runner.invoke(cli, ["submit", "--description", "x"])
        assert result.exit_code == 2
