"""Local blob stores for binary library assets.

The file store keeps each asset as ``<id>.bin`` plus a ``<id>.meta.json``
sidecar carrying name, MIME type, and category.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from fce_synthesis.models import BlobAsset

log = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


class FileBlobStore:
    """Binary assets on the local filesystem."""

    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        self._base.mkdir(parents=True, exist_ok=True)

    def _paths(self, asset_id: str) -> tuple[Path, Path]:
        safe = _UNSAFE.sub("_", asset_id)
        return self._base / f"{safe}.bin", self._base / f"{safe}.meta.json"

    def put(self, asset: BlobAsset) -> None:
        data_path, meta_path = self._paths(asset.id)
        data_path.write_bytes(asset.data)
        meta = {
            "id": asset.id,
            "name": asset.name,
            "mimeType": asset.mime_type,
            "category": asset.category,
        }
        meta_path.write_text(json.dumps(meta), encoding="utf-8")
        log.debug("Stored blob %s (%d bytes)", asset.id, len(asset.data))

    def list_assets(self) -> list[BlobAsset]:
        assets = []
        for meta_path in sorted(self._base.glob("*.meta.json")):
            data_path = meta_path.with_name(meta_path.name[: -len(".meta.json")] + ".bin")
            try:
                meta = json.loads(meta_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError:
                log.warning("Skipping blob with unreadable metadata: %s", meta_path.name)
                continue
            if not isinstance(meta, dict):
                log.warning("Skipping blob with non-object metadata: %s", meta_path.name)
                continue
            if not data_path.is_file():
                log.warning("Skipping blob %s: data file missing", meta.get("id", meta_path.name))
                continue
            assets.append(
                BlobAsset(
                    id=str(meta.get("id", data_path.stem)),
                    name=str(meta.get("name", "")),
                    mime_type=str(meta.get("mimeType") or "application/octet-stream"),
                    data=data_path.read_bytes(),
                    category=str(meta.get("category", "")),
                )
            )
        return sorted(assets, key=lambda a: a.id)


class MemoryBlobStore:
    """Binary assets held in memory."""

    def __init__(self, assets: list[BlobAsset] | None = None) -> None:
        self._assets: dict[str, BlobAsset] = {a.id: a for a in assets or []}

    def put(self, asset: BlobAsset) -> None:
        self._assets[asset.id] = asset

    def list_assets(self) -> list[BlobAsset]:
        return [self._assets[k] for k in sorted(self._assets)]
