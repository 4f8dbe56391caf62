"""JSON export: the document model as plain nested objects."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any

from fce_synthesis.assembler.models import DocumentModel


def document_to_dict(document: DocumentModel) -> dict[str, Any]:
    """Plain-dict form of *document*, the payload sent to the render service."""
    return dataclasses.asdict(document)


class JSONFormatter:
    """Renders a :class:`DocumentModel` as indented JSON bytes."""

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def format(self, document: DocumentModel, **kwargs: Any) -> bytes:
        """Serialize *document* to JSON bytes."""
        return json.dumps(
            document_to_dict(document),
            indent=self._indent,
            ensure_ascii=False,
            default=str,
        ).encode()

    def format_to_file(self, document: DocumentModel, path: Path, **kwargs: Any) -> Path:
        """Write JSON to *path* and return it."""
        path.write_bytes(self.format(document, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/json"
