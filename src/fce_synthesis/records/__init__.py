"""Record Store Adapter and legacy-record normalization."""

from __future__ import annotations

from fce_synthesis.records.adapter import RecordStoreAdapter, merge_profile
from fce_synthesis.records.normalize import (
    gather_tests,
    normalize_test,
    parse_structured_answer,
)

__all__ = [
    "RecordStoreAdapter",
    "gather_tests",
    "merge_profile",
    "normalize_test",
    "parse_structured_answer",
]
