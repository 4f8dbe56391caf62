"""Record store held in process memory, for tests and one-shot runs."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class MemoryRecordStore:
    """Record documents keyed by record kind, nothing persisted."""

    def __init__(self, records: dict[str, str] | None = None) -> None:
        self._records = dict(records or {})

    def save(self, key: str, data: str) -> None:
        self._records[key] = data
        log.debug("Cached record %s in memory (%d chars)", key, len(data))

    def load(self, key: str) -> str:
        try:
            return self._records[key]
        except KeyError:
            raise KeyError(f"No {key} record in memory store") from None
