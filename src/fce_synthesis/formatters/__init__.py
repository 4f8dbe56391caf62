"""Export adapters for the assembled document model.

Usage::

    from fce_synthesis.formatters import JSONFormatter, PDFFormatter, RemoteRenderClient

    pdf_bytes = PDFFormatter().format(document)
    json_bytes = JSONFormatter().format(document)
    with RemoteRenderClient() as client:
        docx_bytes = client.render(document)
"""

from __future__ import annotations

from typing import Any

from fce_synthesis.formatters.json_formatter import JSONFormatter, document_to_dict
from fce_synthesis.formatters.protocols import IOutputFormatter
from fce_synthesis.formatters.render_service import RemoteRenderClient

__all__ = [
    "IOutputFormatter",
    "JSONFormatter",
    "PDFFormatter",
    "RemoteRenderClient",
    "document_to_dict",
]


def __getattr__(name: str) -> Any:
    """Lazy-load PDFFormatter so reportlab is only imported when needed."""
    if name == "PDFFormatter":
        from fce_synthesis.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
