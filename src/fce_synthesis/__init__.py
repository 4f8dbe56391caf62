"""fce-synthesis: Functional Capacity Evaluation report synthesis engine.

Turns stored per-test measurement records into summary statistics,
category assignments, job-match verdicts, validity crosschecks, and a
format-agnostic document model for export adapters.
"""

from __future__ import annotations

from fce_synthesis.categorization import categorize, categorize_all
from fce_synthesis.engine import SynthesisEngine
from fce_synthesis.exceptions import (
    AssemblyError,
    ExportError,
    FCEError,
    ProfileStoreError,
    RecordStoreError,
    RenderRejectedError,
    RenderServiceUnavailableError,
)
from fce_synthesis.models import TestCategory, TestRecord

__version__ = "0.1.0"

__all__ = [
    "SynthesisEngine",
    "TestCategory",
    "TestRecord",
    "categorize",
    "categorize_all",
    "FCEError",
    "RecordStoreError",
    "ProfileStoreError",
    "AssemblyError",
    "ExportError",
    "RenderServiceUnavailableError",
    "RenderRejectedError",
]
