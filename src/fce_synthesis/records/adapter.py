"""Record Store Adapter: reads raw per-step records and normalizes them.

Three backing stores sit behind this adapter:

* a durable key-value store holding one JSON document per record kind
* a local blob store for larger binary library assets
* an optional remote profile store, the source of truth for evaluator
  profile data, with the local ``evaluatorData`` record as its cache
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from fce_synthesis.exceptions import RecordStoreError
from fce_synthesis.models import (
    BlobAsset,
    EvaluationSnapshot,
    EvaluatorProfile,
    RecordKind,
)
from fce_synthesis.persistence.protocols import IBlobStore, IProfileStore, IRecordStore
from fce_synthesis.records import normalize

log = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def merge_profile(local: dict[str, Any], remote: dict[str, Any]) -> dict[str, Any]:
    """Fill gaps in *local* from *remote*; present local fields always win."""
    merged = dict(local)
    for key, value in remote.items():
        if _is_blank(merged.get(key)) and not _is_blank(value):
            merged[key] = value
    return merged


def _decode_data_url(data_url: str) -> tuple[str, bytes] | None:
    header, sep, payload = data_url.partition(",")
    if not sep or ";base64" not in header:
        return None
    mime = header[len("data:") :].split(";", 1)[0] if header.startswith("data:") else ""
    try:
        return mime or "application/octet-stream", base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


class RecordStoreAdapter:
    """Fetches evaluation records and turns them into an :class:`EvaluationSnapshot`."""

    def __init__(
        self,
        store: IRecordStore,
        blob_store: IBlobStore | None = None,
        profile_store: IProfileStore | None = None,
        profile_id: str = "",
    ) -> None:
        self._store = store
        self._blob_store = blob_store
        self._profile_store = profile_store
        self._profile_id = profile_id

    # ── Raw access ──────────────────────────────────────────────────

    def get_record(self, kind: RecordKind) -> dict[str, Any] | None:
        """Return the stored JSON object for *kind*, or None.

        Missing, malformed, and non-object records all read as None.
        Raises RecordStoreError when the backend itself fails.
        """
        try:
            raw = self._store.load(kind.value)
        except KeyError:
            return None
        except Exception as exc:
            raise RecordStoreError(f"Failed to load record {kind.value}: {exc}") from exc

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            log.warning("Record %s is not valid JSON; treating as empty", kind.value)
            return None
        if not isinstance(data, dict):
            log.warning("Record %s is not a JSON object; treating as empty", kind.value)
            return None
        log.debug("Loaded record %s", kind.value)
        return data

    def list_blob_assets(self) -> list[BlobAsset]:
        """Library assets from the blob store plus inline data-URL entries."""
        assets = list(self._blob_store.list_assets()) if self._blob_store else []
        library = self.get_record(RecordKind.DIGITAL_LIBRARY) or {}
        for index, item in enumerate(normalize.as_list(library.get("savedFileData"))):
            entry = normalize.as_dict(item)
            decoded = _decode_data_url(normalize.as_text(entry.get("dataUrl")))
            if decoded is None:
                continue
            mime, data = decoded
            assets.append(
                BlobAsset(
                    id=normalize.as_text(entry.get("id")) or f"library-{index + 1}",
                    name=normalize.as_text(entry.get("name")) or f"Library file {index + 1}",
                    mime_type=normalize.as_text(entry.get("type")) or mime,
                    data=data,
                    category=normalize.as_text(entry.get("category")),
                )
            )
        return assets

    def get_profile(self, profile_id: str = "") -> dict[str, Any] | None:
        """Evaluator profile: local cache, gaps filled from the remote store.

        A remote failure degrades to the cached copy.  A merge that added
        fields is written back to the cache.
        """
        profile_id = profile_id or self._profile_id
        local = self.get_record(RecordKind.EVALUATOR) or {}
        if self._profile_store is None or not profile_id:
            return local or None

        try:
            remote = self._profile_store.get_profile(profile_id)
        except Exception:
            log.warning("Profile store unavailable; using cached profile %s", profile_id, exc_info=True)
            return local or None

        if not remote:
            return local or None
        merged = merge_profile(local, remote)
        if merged != local:
            try:
                self._store.save(RecordKind.EVALUATOR.value, json.dumps(merged))
            except Exception:
                log.warning("Could not refresh cached profile %s", profile_id, exc_info=True)
            else:
                log.debug("Refreshed cached profile %s", profile_id)
        return merged

    # ── Snapshot ────────────────────────────────────────────────────

    def _safe_record(self, kind: RecordKind) -> dict[str, Any] | None:
        try:
            return self.get_record(kind)
        except RecordStoreError:
            log.warning("Record %s unavailable; section will be empty", kind.value, exc_info=True)
            return None

    def load_snapshot(self) -> EvaluationSnapshot:
        """Read every record kind once and normalize into a snapshot.

        Store failures for one record kind leave that part empty rather
        than aborting the whole snapshot.
        """
        tests = normalize.gather_tests(
            self._safe_record(RecordKind.TESTS),
            self._safe_record(RecordKind.MTM_TESTS),
        )
        answers, conclusion = normalize.normalize_referrals(
            self._safe_record(RecordKind.REFERRAL_ANSWERS)
        )

        try:
            profile = self.get_profile()
        except RecordStoreError:
            log.warning("Evaluator profile unavailable", exc_info=True)
            profile = None

        try:
            assets = self.list_blob_assets()
        except (RecordStoreError, OSError):
            log.warning("Library assets unavailable", exc_info=True)
            assets = []

        return EvaluationSnapshot(
            claimant=normalize.normalize_claimant(self._safe_record(RecordKind.CLAIMANT)),
            evaluator=EvaluatorProfile.from_dict(profile),
            tests=tuple(tests),
            activity_ratings=tuple(
                normalize.normalize_activity_ratings(
                    self._safe_record(RecordKind.ACTIVITY_RATINGS)
                )
            ),
            referral_answers=tuple(answers),
            conclusion=conclusion,
            pain=normalize.normalize_pain(self._safe_record(RecordKind.PAIN_ILLUSTRATION)),
            protocol_selection=tuple(
                normalize.normalize_protocol_selection(
                    self._safe_record(RecordKind.PROTOCOL_SELECTION)
                )
            ),
            blob_assets=tuple(assets),
        )
