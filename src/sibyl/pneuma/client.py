"""
Chain Client - Signing client bound to one account on a Secret Network LCD.

Exposes the four contract operations the workflows need plus the signing
callback and the per-session encryption seed:

- upload(bytecode, opts)                 -> {"codeId": int}
- instantiate(code_id, init_msg, label)  -> {"contractAddress": str}
- query_contract_smart(address, msg)     -> dict
- execute(address, msg)                  -> {"data": bytes}

Transaction building, payload encryption and broadcasting are done by
secret-sdk; this module wires a credential, an endpoint, the encryption
seed and the fee schedule together.  Transactions are broadcast in sync
mode, then looked up by hash until they are committed.
"""

from __future__ import annotations

import secrets
import time
from typing import Any, Callable, Optional, Protocol

from secret_sdk.client.lcd import LCDClient
from secret_sdk.client.lcd.api.tx import CreateTxOptions
from secret_sdk.core import Coins
from secret_sdk.core.fee import Fee as SdkFee
from secret_sdk.core.msg import Msg
from secret_sdk.core.tx import TxInfo
from secret_sdk.core.wasm import MsgInstantiateContract, MsgStoreCode
from secret_sdk.exceptions import LCDResponseError
from secret_sdk.protobuf.cosmos.tx.v1beta1 import BroadcastMode

from ..config import Fee, FeeSchedule, Settings
from ..sigil.keys import Credential, signing_key


SEED_BYTES = 32
TX_TIMEOUT = 120
POLL_INTERVAL = 2.0


class ChainClientError(RuntimeError):
    exit_code: int = 1


class ChainClient(Protocol):
    address: str
    encryption_seed: bytes

    def sign(self, sign_bytes: bytes) -> bytes: ...

    def upload(self, bytecode: bytes, opts: Optional[dict] = None) -> dict[str, Any]: ...

    def instantiate(self, code_id: int, init_msg: dict, label: str) -> dict[str, Any]: ...

    def query_contract_smart(self, address: str, query_msg: dict) -> dict[str, Any]: ...

    def execute(self, address: str, exec_msg: dict) -> dict[str, Any]: ...


ClientFactory = Callable[[Credential, Settings], ChainClient]


def generate_seed() -> bytes:
    """Fresh random transaction-encryption seed (32 bytes)."""
    return secrets.token_bytes(SEED_BYTES)


def sdk_fee(fee: Fee) -> SdkFee:
    return SdkFee(gas_limit=fee.gas_limit, amount=Coins.from_str(fee.coins()))


def custom_fees(schedule: FeeSchedule) -> dict[str, SdkFee]:
    """
    Fee schedule in the shape LCDClient expects for ``custom_fees``.

    ``default`` is the exec fee, the one the SDK falls back to for
    messages it has no named entry for.
    """
    fees = {
        "upload": sdk_fee(schedule.upload),
        "init": sdk_fee(schedule.init),
        "exec": sdk_fee(schedule.exec),
        "send": sdk_fee(schedule.send),
    }
    fees["default"] = fees["exec"]
    return fees


def _event_value(info: TxInfo, event_type: str, key: str) -> str:
    """First attribute value of an event in a committed transaction."""
    # tx_info flattens logs to {"msg", "type", "key", "value"} entries
    for entry in info.logs or []:
        if isinstance(entry, dict) and entry.get("type") == event_type and entry.get("key") == key:
            return str(entry["value"])

    for event in info.events or []:
        if event.get("type") != event_type:
            continue
        for attribute in event.get("attributes", []):
            if attribute.get("key") == key:
                return str(attribute["value"])

    raise ChainClientError(f"{event_type}.{key} not found in tx {info.txhash}")


def _tx_data(info: TxInfo) -> bytes:
    """Decrypted response payload of the first message in a transaction."""
    if not info.data:
        return b""
    data = getattr(info.data[0], "data", info.data[0])
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    return str(data).encode("utf-8")


class SecretChainClient:
    """
    ChainClient backed by secret-sdk's LCDClient and Wallet.

    Args:
        credential: Account credential (mnemonic is used for signing)
        settings: Endpoint, chain id and fee schedule
        seed: Encryption seed (default: fresh random seed)
    """

    def __init__(
        self,
        credential: Credential,
        settings: Settings,
        seed: Optional[bytes] = None,
    ) -> None:
        self.address = credential.address
        self.encryption_seed = seed if seed is not None else generate_seed()
        self.fees = custom_fees(settings.fees)
        self._key = signing_key(credential.mnemonic)
        self._lcd = LCDClient(
            url=settings.lcd_url,
            chain_id=settings.chain_id,
            encryption_seed=self.encryption_seed,
            custom_fees=self.fees,
        )
        self._wallet = self._lcd.wallet(self._key)

    def sign(self, sign_bytes: bytes) -> bytes:
        return self._key.sign(sign_bytes)

    def wait_for_tx(
        self,
        txhash: str,
        timeout: int = TX_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
    ) -> TxInfo:
        """
        Wait until a broadcast transaction is committed.

        Raises:
            ChainClientError: If the transaction failed on chain or was not
                found within ``timeout`` seconds
        """
        start = time.time()
        while time.time() - start < timeout:
            try:
                info = self._lcd.tx.tx_info(txhash)
            except LCDResponseError:
                time.sleep(poll_interval)
                continue
            if info.code:
                raise ChainClientError(
                    f"Transaction {txhash} failed with code {info.code}: {info.rawlog}"
                )
            return info

        raise ChainClientError(f"Transaction {txhash} not committed within {timeout}s")

    def _broadcast(self, msg: Msg, fee_name: str) -> TxInfo:
        signed = self._wallet.create_and_sign_tx(
            CreateTxOptions(msgs=[msg], memo="", fee=self.fees[fee_name])
        )
        result = self._lcd.tx.broadcast_adapter(
            signed, mode=BroadcastMode.BROADCAST_MODE_SYNC
        )
        return self.wait_for_tx(result.txhash)

    def upload(self, bytecode: bytes, opts: Optional[dict] = None) -> dict[str, Any]:
        opts = opts or {}
        msg = MsgStoreCode(
            sender=self.address,
            wasm_byte_code=bytecode,
            source=opts.get("source", ""),
            builder=opts.get("builder", ""),
        )
        info = self._broadcast(msg, "upload")
        return {"codeId": int(_event_value(info, "message", "code_id")), "txhash": info.txhash}

    def instantiate(self, code_id: int, init_msg: dict, label: str) -> dict[str, Any]:
        code_hash = self._lcd.wasm.code_hash_by_code_id(code_id)["code_hash"]
        msg = MsgInstantiateContract(
            sender=self.address,
            code_id=code_id,
            code_hash=code_hash,
            init_msg=init_msg,
            label=label,
            encryption_utils=self._lcd.encrypt_utils,
        )
        info = self._broadcast(msg, "init")
        return {
            "contractAddress": _event_value(info, "message", "contract_address"),
            "txhash": info.txhash,
        }

    def query_contract_smart(self, address: str, query_msg: dict) -> dict[str, Any]:
        return self._lcd.wasm.contract_query(address, query_msg)

    def execute(self, address: str, exec_msg: dict) -> dict[str, Any]:
        msg = self._lcd.wasm.contract_execute_msg(self.address, address, exec_msg)
        info = self._broadcast(msg, "exec")
        return {"data": _tx_data(info), "txhash": info.txhash}


def build_client(credential: Credential, settings: Settings) -> ChainClient:
    """Construct a signing client for a credential."""
    return SecretChainClient(credential, settings)
