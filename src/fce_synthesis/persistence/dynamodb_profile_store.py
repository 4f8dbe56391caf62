"""DynamoDB-backed evaluator profile store with TTL caching."""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any

from fce_synthesis.exceptions import ProfileStoreError

log = logging.getLogger(__name__)


class _TTLCache:
    """Thread-safe in-process cache with TTL expiration."""

    def __init__(self, ttl_seconds: float = 300.0, max_size: int = 200) -> None:
        self._ttl = ttl_seconds
        self._max_size = max_size
        self._store: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            ts, value = entry
            if time.monotonic() - ts > self._ttl:
                del self._store[key]
                return None
            return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            if len(self._store) >= self._max_size:
                self._evict_oldest()
            self._store[key] = (time.monotonic(), value)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def _evict_oldest(self) -> None:
        now = time.monotonic()
        expired = [k for k, (ts, _) in self._store.items() if now - ts > self._ttl]
        for k in expired:
            del self._store[k]
        if len(self._store) >= self._max_size:
            oldest = min(self._store, key=lambda k: self._store[k][0])
            del self._store[oldest]


class DynamoDBProfileStore:
    """Reads evaluator profiles from a DynamoDB table.

    Table schema::

        PK:       "PROFILE#{profile_id}"
        profile:  JSON document (S) with camelCase profile fields
    """

    def __init__(
        self,
        table_name: str,
        aws_region: str = "us-east-1",
        cache_ttl_seconds: float = 300.0,
        cache_max_size: int = 200,
        boto3_client: Any | None = None,
    ) -> None:
        self._table_name = table_name
        self._cache = _TTLCache(ttl_seconds=cache_ttl_seconds, max_size=cache_max_size)

        if boto3_client is not None:
            self._client = boto3_client
        else:
            try:
                import boto3
            except ImportError as exc:
                raise ImportError(
                    "boto3 is required for the DynamoDB profile store. "
                    "Install with: pip install fce-synthesis[aws]"
                ) from exc
            self._client = boto3.client("dynamodb", region_name=aws_region)

    def get_profile(self, profile_id: str) -> dict[str, Any] | None:
        """Return the profile document for *profile_id*, or None if absent."""
        cached = self._cache.get(profile_id)
        if cached is not None:
            return dict(cached)

        try:
            response = self._client.get_item(
                TableName=self._table_name,
                Key={"PK": {"S": f"PROFILE#{profile_id}"}},
            )
        except Exception as exc:
            raise ProfileStoreError(f"Failed to read profile {profile_id}: {exc}") from exc

        item = response.get("Item")
        if not item:
            return None
        try:
            profile = json.loads(item.get("profile", {}).get("S", "{}"))
        except json.JSONDecodeError as exc:
            raise ProfileStoreError(f"Profile {profile_id} is not valid JSON") from exc
        if not isinstance(profile, dict):
            return None

        self._cache.put(profile_id, profile)
        log.debug("Loaded profile %s from DynamoDB", profile_id)
        return dict(profile)

    def clear_cache(self) -> None:
        self._cache.clear()
