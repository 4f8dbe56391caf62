"""Store protocols: key-value records, binary assets, and remote profiles."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fce_synthesis.models import BlobAsset


@runtime_checkable
class IRecordStore(Protocol):
    """Durable store holding one JSON document per :class:`RecordKind` key.

    The adapter only ever reads whole records and writes back the
    evaluator profile cache, so the contract is load and save.
    """

    def save(self, key: str, data: str) -> None:
        """Replace the document stored under *key*."""
        ...

    def load(self, key: str) -> str:
        """Return the document stored under *key*. Raises KeyError if absent."""
        ...


@runtime_checkable
class IBlobStore(Protocol):
    """Local store for larger binary assets (photos, scans, documents)."""

    def put(self, asset: BlobAsset) -> None:
        """Store *asset*, replacing any asset with the same id."""
        ...

    def list_assets(self) -> list[BlobAsset]:
        """Return every stored asset, ordered by id."""
        ...


@runtime_checkable
class IProfileStore(Protocol):
    """Remote document database holding evaluator profiles."""

    def get_profile(self, profile_id: str) -> dict[str, Any] | None:
        """Return the profile document, or None if absent.

        Raises ProfileStoreError when the store cannot be reached.
        """
        ...
