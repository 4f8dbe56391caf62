"""Exception hierarchy for fce-synthesis."""

from __future__ import annotations


class FCEError(Exception):
    """Base exception for all fce-synthesis errors."""


class RecordStoreError(FCEError):
    """Raised when a record store backend operation fails."""


class ProfileStoreError(FCEError):
    """Raised when the remote evaluator-profile store cannot be read."""


class AssemblyError(FCEError):
    """Raised when a snapshot cannot be assembled into a document."""


class ExportError(FCEError):
    """Base class for export adapter failures."""


class RenderServiceUnavailableError(ExportError):
    """Render service unreachable, timed out, or failed with a 5xx."""


class RenderRejectedError(ExportError):
    """Render service rejected the document model with a 4xx; indicates an assembler defect."""

    def __init__(self, message: str, status_code: int = 0, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
