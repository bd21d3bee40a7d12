__all__ = [
    # Config
    "Fee",
    "FeeSchedule",
    "Settings",
    "load_settings",
    # Key material
    "Absent",
    "Credential",
    "CredentialError",
    "Identity",
    "Present",
    "derive_address",
    "generate",
    "load",
    "save_credential",
    # Chain client
    "ChainClient",
    "ChainClientError",
    "SecretChainClient",
    "build_client",
    # Records
    "ContractRecord",
    "RecordError",
    "load_contract_record",
    "read_bytecode",
    "save_contract_record",
    # Workflows
    "BootstrapError",
    "BootstrapWorkflow",
    "contract_label",
    "ContractStats",
    "InteractionError",
    "InteractionWorkflow",
    "ScoreRecord",
    "SubmitOutcome",
    "format_timestamp",
    "is_score_recorded",
]

from .config import Fee, FeeSchedule, Settings, load_settings
from .sigil.keys import (
    Absent,
    Credential,
    CredentialError,
    Identity,
    Present,
    derive_address,
    generate,
    load,
    save_credential,
)
from .pneuma.client import ChainClient, ChainClientError, SecretChainClient, build_client
from .pneuma.records import ContractRecord, RecordError, load_contract_record, read_bytecode, save_contract_record
from .pneuma.bootstrap import BootstrapError, BootstrapWorkflow, contract_label
from .pneuma.interaction import (
    ContractStats,
    InteractionError,
    InteractionWorkflow,
    ScoreRecord,
    SubmitOutcome,
    format_timestamp,
    is_score_recorded,
)
