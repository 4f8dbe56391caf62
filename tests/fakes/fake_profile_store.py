"""Evaluator profile store fakes."""

from __future__ import annotations

from typing import Any

from fce_synthesis.exceptions import ProfileStoreError


class FakeProfileStore:
    """Returns canned profiles and counts lookups."""

    def __init__(self, profiles: dict[str, dict[str, Any]] | None = None) -> None:
        self._profiles = profiles or {}
        self.calls: list[str] = []

    def get_profile(self, profile_id: str) -> dict[str, Any] | None:
        self.calls.append(profile_id)
        profile = self._profiles.get(profile_id)
        return dict(profile) if profile is not None else None


class FailingProfileStore:
    """Profile store that is always unreachable."""

    def get_profile(self, profile_id: str) -> dict[str, Any] | None:
        raise ProfileStoreError(f"timed out fetching {profile_id}")


class UnreachableProfileStore:
    """Profile store whose client fails below the FCE error hierarchy."""

    def get_profile(self, profile_id: str) -> dict[str, Any] | None:
        raise ConnectionError("network down")
