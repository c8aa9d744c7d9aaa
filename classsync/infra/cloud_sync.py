"""Remote sync of the whole plan list against a Supabase (PostgREST) table.

The remote side holds one shared row (SYNC_RECORD_ID) whose ``plans`` column
is the full JSON plan list. Push upserts that row; pull reads it back and the
caller replaces its local list wholesale. There is no field-level merging.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import httpx

from classsync.domain.Plan import Plan
from classsync.infra import paths
from classsync.utilities.config import SUPABASE_KEY, SUPABASE_URL, SYNC_TIMEOUT_SECONDS
from classsync.utilities.constants import SYNC_RECORD_ID, SYNC_TABLE

logger = logging.getLogger(__name__)

__all__ = ["SyncError", "SyncConfig", "SyncConfigStore", "CloudSync"]


class SyncError(RuntimeError):
    """Remote store rejected or failed a push/pull."""


@dataclass(frozen=True)
class SyncConfig:
    url: str
    key: str

    @classmethod
    def normalized(cls, url: str, key: str) -> "SyncConfig":
        return cls(url=url.strip().rstrip("/"), key=key.strip())

    def to_dict(self):
        return {"url": self.url, "key": self.key}


class SyncConfigStore:
    """Sync credentials saved next to the plans file, falling back to SUPABASE_URL/SUPABASE_KEY."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else paths.SYNC_CONFIG_FILE

    def load(self) -> Optional[SyncConfig]:
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return SyncConfig.normalized(data["url"], data["key"])
            except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
                logger.error("Invalid sync config in %s: %s", self.path, e)
                return None
        if SUPABASE_URL and SUPABASE_KEY:
            return SyncConfig.normalized(SUPABASE_URL, SUPABASE_KEY)
        return None

    def save(self, config: SyncConfig) -> SyncConfig:
        config = SyncConfig.normalized(config.url, config.key)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        return config

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class CloudSync:
    def __init__(self, config: SyncConfig, transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = SYNC_TIMEOUT_SECONDS):
        self.config = config
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self.config.url}/rest/v1",
            headers={
                "apikey": self.config.key,
                "Authorization": f"Bearer {self.config.key}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    async def push(self, plans: List[Plan]) -> None:
        payload = {"id": SYNC_RECORD_ID, "plans": [p.to_dict() for p in plans]}
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/{SYNC_TABLE}",
                    params={"on_conflict": "id"},
                    headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            logger.error("Cloud push failed: %s", e)
            raise SyncError(f"Cloud push failed: {e}") from e
        if response.status_code >= 400:
            logger.error("Cloud push rejected (%s): %s", response.status_code, response.text)
            raise SyncError(f"Cloud push rejected ({response.status_code}): {response.text}")
        logger.info("Pushed %d plans to %s", len(plans), self.config.url)

    async def pull(self) -> Optional[List[Plan]]:
        """Return the remote plan list, or None when the shared row does not exist yet."""
        try:
            async with self._client() as client:
                response = await client.get(
                    f"/{SYNC_TABLE}",
                    params={"id": f"eq.{SYNC_RECORD_ID}", "select": "plans"},
                )
        except httpx.HTTPError as e:
            logger.error("Cloud pull failed: %s", e)
            raise SyncError(f"Cloud pull failed: {e}") from e
        if response.status_code >= 400:
            logger.error("Cloud pull rejected (%s): %s", response.status_code, response.text)
            raise SyncError(f"Cloud pull rejected ({response.status_code}): {response.text}")
        try:
            rows = response.json()
            if not rows or rows[0].get("plans") is None:
                return None
            plans = [Plan.from_dict(p) for p in rows[0]["plans"]]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Cloud pull returned unreadable data: %s", e)
            raise SyncError(f"Cloud pull returned unreadable data: {e}") from e
        logger.info("Pulled %d plans from %s", len(plans), self.config.url)
        return plans
