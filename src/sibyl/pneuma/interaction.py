"""
Interaction - Read and write score records on a deployed contract.

- query_score:  {"get_score": {"address": ...}}   (read, no caching)
- query_stats:  {"get_stats": {}}                 (read)
- submit_score: {"record": {"score", "description"}} (execute)

The contract answers an execute with an unstructured byte payload.  Whether
a submission succeeded is decided by ``is_score_recorded`` alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from ..config import Settings
from ..sigil.keys import Identity, Present
from .client import ChainClientError, ClientFactory, build_client
from .records import ContractRecord


SCORE_RECORDED = "Score recorded"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Numeric short-date layouts, keyed by lowercase locale tag
_DATE_FORMATS: dict[str, str] = {
    "en-us": "{m}/{d}/{y}",
    "en-gb": "{dd}/{mm}/{y}",
    "de-de": "{d}.{m}.{y}",
    "fr-fr": "{dd}/{mm}/{y}",
    "ja-jp": "{y}/{m}/{d}",
}


class InteractionError(ChainClientError):
    pass


@dataclass(frozen=True)
class ScoreRecord:
    status: str
    score: Optional[int] = None
    description: Optional[str] = None
    timestamp: Optional[int] = None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "ScoreRecord":
        return cls(
            status=str(data.get("status", "")),
            score=data.get("score"),
            description=data.get("description"),
            timestamp=data.get("timestamp"),
        )


@dataclass(frozen=True)
class ContractStats:
    score_count: int
    max_size: int


@dataclass(frozen=True)
class SubmitOutcome:
    recorded: bool
    response: str


def is_score_recorded(response: str) -> bool:
    """Success check for a ``record`` execute response."""
    return SCORE_RECORDED in response


def format_timestamp(timestamp: int, locale: str = "en-US") -> str:
    """
    Render a millisecond epoch timestamp as a short date (UTC).

    Unknown locales fall back to ISO 8601 (``YYYY-MM-DD``).

    >>> format_timestamp(0)
    '1/1/1970'
    """
    when = _EPOCH + timedelta(milliseconds=timestamp)
    layout = _DATE_FORMATS.get(locale.replace("_", "-").lower())
    if layout is None:
        return when.date().isoformat()
    return layout.format(
        d=when.day,
        m=when.month,
        dd=f"{when.day:02d}",
        mm=f"{when.month:02d}",
        y=when.year,
    )


class InteractionWorkflow:
    """
    Query and execute against an already deployed contract.

    Every call builds a fresh client from the identity; nothing is cached
    between calls.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = build_client,
    ) -> None:
        self.settings = settings
        self.client_factory = client_factory

    def query_score(
        self, identity: Identity, record: ContractRecord
    ) -> Optional[ScoreRecord]:
        if not isinstance(identity, Present):
            return None

        client = self.client_factory(identity.credential, self.settings)
        query = {"get_score": {"address": identity.credential.address}}
        try:
            response = client.query_contract_smart(record.contract_address, query)
        except Exception as exc:
            raise InteractionError(f"Could not query score: {exc}") from exc
        return ScoreRecord.from_response(response or {})

    def query_stats(
        self, identity: Identity, record: ContractRecord
    ) -> Optional[ContractStats]:
        if not isinstance(identity, Present):
            return None

        client = self.client_factory(identity.credential, self.settings)
        try:
            response = client.query_contract_smart(
                record.contract_address, {"get_stats": {}}
            )
            return ContractStats(
                score_count=int(response["score_count"]),
                max_size=int(response["max_size"]),
            )
        except Exception as exc:
            raise InteractionError(f"Could not query stats: {exc}") from exc

    def submit_score(
        self,
        identity: Identity,
        record: ContractRecord,
        score: int,
        description: str,
    ) -> Optional[SubmitOutcome]:
        if not isinstance(identity, Present):
            return None

        client = self.client_factory(identity.credential, self.settings)
        message = {"record": {"score": score, "description": description}}
        try:
            response = client.execute(record.contract_address, message)
        except Exception as exc:
            raise InteractionError(f"Could not submit score: {exc}") from exc

        text = bytes(response.get("data") or b"").decode("utf-8", errors="replace")
        return SubmitOutcome(recorded=is_score_recorded(text), response=text)
