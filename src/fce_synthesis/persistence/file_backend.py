"""Record store on local disk: ``<directory>/<record key>.json``."""

from __future__ import annotations

import logging
import re
from pathlib import Path

log = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[\\/]")


class FileRecordStore:
    """One JSON file per record kind in a per-evaluation directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """File holding *key*; path separators in the key are flattened."""
        return self._directory / f"{_UNSAFE.sub('_', key)}.json"

    def save(self, key: str, data: str) -> None:
        path = self.path_for(key)
        path.write_text(data, encoding="utf-8")
        log.debug("Wrote record %s (%d chars) to %s", key, len(data), path)

    def load(self, key: str) -> str:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise KeyError(f"No {key} record at {path}") from None
