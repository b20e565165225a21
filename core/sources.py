import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Awaitable, Callable

import httpx

from core.errors import SourceUnavailable
from db.store import ListingStore

log = logging.getLogger(__name__)


class ListingSource(ABC):
    """Async supplier of raw listing records.

    ``fetch`` returns a non-empty list or raises ``SourceUnavailable``.
    """

    name = "source"

    @abstractmethod
    async def fetch(self) -> list[Any]:
        pass

    def _require_records(self, payload: Any) -> list[Any]:
        if not isinstance(payload, list):
            raise SourceUnavailable(self.name, f"expected a list, got {type(payload).__name__}")
        if not payload:
            raise SourceUnavailable(self.name, "no records")
        if not any(isinstance(item, dict) for item in payload):
            raise SourceUnavailable(self.name, "records are not objects")
        return payload


class FeedSource(ListingSource):
    """Remote JSON listing feed (Marketcheck-style or flat records)."""

    name = "feed"

    def __init__(
        self,
        url: str | None,
        headers: dict[str, str] | None = None,
        limit: int = 1000,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.headers = headers or {}
        self.limit = limit
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> list[Any]:
        if not self.url:
            raise SourceUnavailable(self.name, "feed url not configured")

        try:
            async with httpx.AsyncClient(
                headers=self.headers, timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(self.url, params={"limit": self.limit})
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPError as e:
            raise SourceUnavailable(self.name, f"request failed: {e}") from e
        except json.JSONDecodeError as e:
            raise SourceUnavailable(self.name, f"invalid JSON: {e}") from e

        # Accept a bare list or the common {"listings": [...]} / {"data": [...]} envelopes.
        if isinstance(payload, dict):
            payload = payload.get("listings", payload.get("data"))

        records = self._require_records(payload)
        log.debug(f"Feed returned {len(records)} records")
        return records


class StoreSource(ListingSource):
    """Local SQLite listing cache."""

    name = "store"

    def __init__(self, db_path: Path | str, limit: int = 1000):
        self.db_path = db_path
        self.limit = limit

    async def fetch(self) -> list[Any]:
        try:
            async with ListingStore(self.db_path) as store:
                records = await store.fetch_listings(self.limit)
        except Exception as e:
            raise SourceUnavailable(self.name, f"store read failed: {e}") from e

        records = self._require_records(records)
        log.debug(f"Store returned {len(records)} rows")
        return records


class CallableSource(ListingSource):
    """Wrap any ``async () -> list`` collaborator as a source."""

    def __init__(self, name: str, fetcher: Callable[[], Awaitable[Any]]):
        self.name = name
        self._fetcher = fetcher

    async def fetch(self) -> list[Any]:
        try:
            payload = await self._fetcher()
        except SourceUnavailable:
            raise
        except Exception as e:
            raise SourceUnavailable(self.name, str(e) or type(e).__name__) from e
        return self._require_records(payload)
