"""Export adapter protocol: the contract every document formatter implements."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from fce_synthesis.assembler.models import DocumentModel


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for local document formatters (PDF, JSON, etc.)."""

    def format(self, document: DocumentModel, **kwargs: Any) -> bytes:
        """Render the document model into output bytes."""
        ...

    def format_to_file(self, document: DocumentModel, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'application/pdf')."""
        ...


__all__ = ["IOutputFormatter"]
