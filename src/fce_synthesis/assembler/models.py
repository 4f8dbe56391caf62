"""Format-agnostic document model handed to export adapters.

The tree holds plain strings and numbers only: no markup, no image
bytes.  Images are carried as references for the renderer to resolve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class BlockKind(str, Enum):
    """Kinds of content block a section may contain."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    FIELDS = "fields"
    TABLE = "table"
    LIST = "list"
    IMAGES = "images"
    BAR_CHART = "bar_chart"
    TEST_RESULT = "test_result"


@dataclass
class Field:
    """A label/value pair."""

    label: str
    value: str


@dataclass
class Table:
    """A simple grid; every row has ``len(columns)`` cells."""

    columns: list[str]
    rows: list[list[str]] = field(default_factory=list)
    caption: str = ""


@dataclass
class ImageRef:
    """Reference to an image the renderer should place."""

    ref: str
    caption: str = ""


@dataclass
class Bar:
    """One bar of a bar chart."""

    label: str
    value: float
    height: float


@dataclass
class Block:
    """A unit of content inside a section."""

    kind: BlockKind
    title: str = ""
    text: str = ""
    items: list[str] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)
    table: Table | None = None
    tables: list[Table] = field(default_factory=list)
    images: list[ImageRef] = field(default_factory=list)
    bars: list[Bar] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class Section:
    """An ordered report section.

    ``error`` is set when the section could not be assembled; the section
    is then empty but keeps its place in the document.
    """

    key: str
    title: str
    blocks: list[Block] = field(default_factory=list)
    children: list[Section] = field(default_factory=list)
    error: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.blocks and not self.children


@dataclass
class DocumentModel:
    """The complete report tree."""

    title: str
    sections: list[Section] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    generated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def section(self, key: str) -> Section:
        """Return the top-level section with *key*. Raises KeyError if absent."""
        for section in self.sections:
            if section.key == key:
                return section
        raise KeyError(key)

    def test_blocks(self) -> list[Block]:
        """Per-test result blocks in document order."""
        blocks: list[Block] = []

        def _walk(section: Section) -> None:
            blocks.extend(b for b in section.blocks if b.kind == BlockKind.TEST_RESULT)
            for child in section.children:
                _walk(child)

        for section in self.sections:
            _walk(section)
        return blocks
