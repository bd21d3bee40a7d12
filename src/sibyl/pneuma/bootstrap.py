"""
Bootstrap - Upload the score contract and instantiate it.

Flow (strictly ordered, each step gated on the previous one):
1. Read bytecode from disk
2. upload(bytecode)                      -> codeId
3. instantiate(codeId, {max_size}, label) -> contractAddress
4. Hand the contract record back to the caller for persistence

There is no rollback.  If instantiate fails after a successful upload the
stored code stays on chain.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..config import Settings
from ..sigil.keys import Identity, Present
from .client import ChainClient, ChainClientError, ClientFactory, build_client
from .records import ContractRecord, read_bytecode


LABEL_OFFSET = 6


class BootstrapError(ChainClientError):
    pass


def contract_label(address: str) -> str:
    """Instance label: the account address without its first six characters."""
    return address[LABEL_OFFSET:]


def _silent(_: str) -> None:
    return None


class BootstrapWorkflow:
    """
    Deploy a fresh contract instance for the configured account.

    Args:
        settings: Invocation settings (bytecode path, init max_size, fees)
        client_factory: Builds the chain client (default: build_client)
        progress: Receives one human-readable line per completed step
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = build_client,
        progress: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.settings = settings
        self.client_factory = client_factory
        self.progress = progress or _silent

    def upload(self, client: ChainClient, bytecode: bytes) -> int:
        try:
            receipt = client.upload(bytecode, {})
            return int(receipt["codeId"])
        except Exception as exc:
            raise BootstrapError(f"Could not upload contract: {exc}") from exc

    def instantiate(self, client: ChainClient, code_id: int) -> ContractRecord:
        init_msg = {"max_size": self.settings.max_size}
        try:
            contract = client.instantiate(code_id, init_msg, contract_label(client.address))
            return ContractRecord(contract_address=str(contract["contractAddress"]))
        except Exception as exc:
            raise BootstrapError(f"Could not instantiate contract: {exc}") from exc

    def run(self, identity: Identity) -> Optional[ContractRecord]:
        """
        Upload and instantiate.

        Returns:
            The new ContractRecord, or None if no identity is configured
        """
        if not isinstance(identity, Present):
            return None

        bytecode = read_bytecode(self.settings.wasm_file)
        client = self.client_factory(identity.credential, self.settings)

        code_id = self.upload(client, bytecode)
        self.progress(f"Received upload receipt (code id {code_id}), instantiating contract")

        record = self.instantiate(client, code_id)
        self.progress(f"Contract instantiated at {record.contract_address}")
        return record
