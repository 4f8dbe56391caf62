"""Consistency crosscheck battery."""

from __future__ import annotations

from fce_synthesis.crosschecks.engine import CrosscheckEngine
from fce_synthesis.crosschecks.models import (
    CROSSCHECK_DEFINITIONS,
    CheckContext,
    CrosscheckId,
    CrosscheckReport,
    CrosscheckResult,
)

__all__ = [
    "CROSSCHECK_DEFINITIONS",
    "CheckContext",
    "CrosscheckEngine",
    "CrosscheckId",
    "CrosscheckReport",
    "CrosscheckResult",
]
