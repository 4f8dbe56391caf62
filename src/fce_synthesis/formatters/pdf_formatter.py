"""PDF output formatter using reportlab.

Renders a :class:`DocumentModel` section by section.  Image references
are resolved against an optional ``assets`` mapping passed to
:meth:`PDFFormatter.format`; unresolved references are listed by name.
Requires the ``pdf`` optional dependency::

    pip install fce-synthesis[pdf]
"""

from __future__ import annotations

from collections.abc import Mapping
from io import BytesIO
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

from fce_synthesis.assembler.constants import CONFIDENTIAL_FOOTER
from fce_synthesis.assembler.models import Block, BlockKind, DocumentModel, Field, Section
from fce_synthesis.assembler.models import Table as TableNode
from fce_synthesis.core.config import AssemblyConfig, PDFFormattingConfig
from fce_synthesis.formatters.pdf_styles import (
    BAR_COLOR,
    BAR_TRACK_WIDTH,
    BRAND_COLOR,
    ERROR_TEXT_COLOR,
    HEADER_BG_COLOR,
    HEADER_TEXT_COLOR,
    ROW_ALT_BG_COLOR,
    SECTION_BORDER_COLOR,
)

try:
    from reportlab.graphics.shapes import Drawing, Rect
    from reportlab.lib import colors as rl_colors
    from reportlab.lib.colors import HexColor
    from reportlab.lib.enums import TA_CENTER
    from reportlab.lib.pagesizes import A4, LETTER
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import inch
    from reportlab.platypus import (
        Flowable,
        Image,
        PageBreak,
        Paragraph,
        SimpleDocTemplate,
        Spacer,
        Table,
        TableStyle,
    )
except ImportError as _exc:
    raise ImportError(
        "reportlab is required for PDF output. Install with: pip install fce-synthesis[pdf]"
    ) from _exc


_PAGE_SIZES = {"letter": LETTER, "a4": A4}
_BAR_HEIGHT = 8.0
_IMAGE_MAX_HEIGHT = 2.5 * inch


def _hex(color_str: str) -> HexColor:
    return HexColor(color_str)


class PDFFormatter:
    """Renders the FCE document model as a printable PDF."""

    def __init__(
        self,
        config: PDFFormattingConfig | None = None,
        assembly_config: AssemblyConfig | None = None,
    ) -> None:
        self._config = config or PDFFormattingConfig()
        self._bar_max_px = (assembly_config or AssemblyConfig()).bar_max_px
        self._page_size: tuple[float, float] = _PAGE_SIZES.get(self._config.page_size, LETTER)
        self._margin: float = self._config.margin_inches * inch
        self._styles = self._build_styles()
        self._footer_text = ""

    # ── Public API ───────────────────────────────────────────────────

    def format(self, document: DocumentModel, **kwargs: Any) -> bytes:
        """Render *document* to PDF bytes.

        Keyword Args:
            assets: Mapping of image reference to image bytes.
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self._page_size,
            leftMargin=self._margin,
            rightMargin=self._margin,
            topMargin=self._margin + 0.3 * inch,
            bottomMargin=self._margin + 0.3 * inch,
            title=document.title,
        )
        self._footer_text = str(document.metadata.get("claimant", ""))
        story = self._build_story(document, kwargs.get("assets") or {})
        doc.build(story, onFirstPage=self._header_footer, onLaterPages=self._header_footer)
        return buffer.getvalue()

    def format_to_file(self, document: DocumentModel, path: Path, **kwargs: Any) -> Path:
        """Write PDF to *path* and return it."""
        path.write_bytes(self.format(document, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/pdf"

    # ── Style setup ──────────────────────────────────────────────────

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        base = getSampleStyleSheet()
        font = self._config.font_family
        body_sz = self._config.body_font_size
        heading_sz = self._config.heading_font_size

        return {
            "title": ParagraphStyle(
                "title",
                parent=base["Title"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz + 6,
                leading=(heading_sz + 6) * 1.2,
                alignment=TA_CENTER,
                spaceAfter=12,
                textColor=_hex(BRAND_COLOR),
            ),
            "heading": ParagraphStyle(
                "heading",
                parent=base["Heading2"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz,
                leading=heading_sz * 1.3,
                spaceBefore=14,
                spaceAfter=6,
                textColor=_hex(BRAND_COLOR),
            ),
            "subheading": ParagraphStyle(
                "subheading",
                parent=base["Heading3"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz - 2,
                leading=(heading_sz - 2) * 1.3,
                spaceBefore=8,
                spaceAfter=4,
            ),
            "body": ParagraphStyle(
                "body",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                spaceAfter=6,
            ),
            "cell": ParagraphStyle(
                "cell",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz - 1,
                leading=(body_sz - 1) * 1.25,
            ),
            "bullet": ParagraphStyle(
                "bullet",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                leftIndent=18,
                bulletIndent=6,
                spaceAfter=3,
            ),
            "caption": ParagraphStyle(
                "caption",
                parent=base["BodyText"],
                fontName=f"{font}-Oblique",
                fontSize=body_sz - 1,
                textColor=rl_colors.grey,
                spaceAfter=4,
            ),
            "error": ParagraphStyle(
                "error",
                parent=base["BodyText"],
                fontName=f"{font}-Oblique",
                fontSize=body_sz,
                textColor=_hex(ERROR_TEXT_COLOR),
            ),
            "center": ParagraphStyle(
                "center",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz + 1,
                alignment=TA_CENTER,
                spaceAfter=4,
            ),
        }

    # ── Story construction ───────────────────────────────────────────

    def _build_story(self, document: DocumentModel, assets: Mapping[str, bytes]) -> list[Flowable]:
        story: list[Flowable] = []
        for section in document.sections:
            if section.key == "cover":
                if self._config.include_cover_page:
                    story.extend(self._build_cover(section))
                continue
            if section.key == "appendix" and not self._config.include_appendix:
                continue
            story.extend(self._build_section(section, assets))
        return story

    def _build_cover(self, section: Section) -> list[Flowable]:
        items: list[Flowable] = [Spacer(1, 1.5 * inch)]
        for block in section.blocks:
            if block.kind == BlockKind.HEADING:
                items.append(Paragraph(escape(block.text), self._styles["title"]))
                items.append(Spacer(1, 0.3 * inch))
            elif block.kind == BlockKind.FIELDS:
                for f in block.fields:
                    text = f"<b>{escape(f.label)}:</b> {escape(f.value)}"
                    items.append(Paragraph(text, self._styles["center"]))
                items.append(Spacer(1, 0.2 * inch))
            elif block.kind == BlockKind.PARAGRAPH:
                items.append(Spacer(1, 0.4 * inch))
                items.append(Paragraph(f"<b>{escape(block.text)}</b>", self._styles["center"]))
        items.append(PageBreak())
        return items

    def _build_section(
        self,
        section: Section,
        assets: Mapping[str, bytes],
        level: str = "heading",
    ) -> list[Flowable]:
        items: list[Flowable] = [Paragraph(escape(section.title), self._styles[level])]
        if section.error:
            items.append(Paragraph(f"Section unavailable: {escape(section.error)}", self._styles["error"]))
            return items
        for block in section.blocks:
            items.extend(self._build_block(block, assets))
        for child in section.children:
            items.extend(self._build_section(child, assets, level="subheading"))
        items.append(Spacer(1, 6))
        return items

    # ── Blocks ───────────────────────────────────────────────────────

    def _build_block(self, block: Block, assets: Mapping[str, bytes]) -> list[Flowable]:
        items: list[Flowable] = []
        if block.kind == BlockKind.TEST_RESULT:
            items.append(Paragraph(escape(block.title), self._styles["subheading"]))
        elif block.title:
            items.append(Paragraph(f"<b>{escape(block.title)}</b>", self._styles["body"]))

        if block.kind == BlockKind.HEADING:
            items.append(Paragraph(escape(block.text), self._styles["heading"]))
        elif block.text:
            items.append(Paragraph(escape(block.text), self._styles["body"]))

        if block.fields:
            items.append(self._fields_table(block.fields))
        for table in ([block.table] if block.table else []) + block.tables:
            items.extend(self._grid(table))
        for text in block.items:
            items.append(Paragraph(escape(text), self._styles["bullet"], bulletText="•"))
        if block.bars:
            items.append(self._bar_chart(block))
        for image in block.images:
            items.append(self._image(image.ref, image.caption, assets))
        if block.kind in (BlockKind.TEST_RESULT, BlockKind.TABLE):
            items.append(Spacer(1, 8))
        return items

    def _fields_table(self, fields: list[Field]) -> Table:
        rows = [
            [
                Paragraph(f"<b>{escape(f.label)}</b>", self._styles["cell"]),
                Paragraph(escape(f.value), self._styles["cell"]),
            ]
            for f in fields
        ]
        width = self._content_width()
        table = Table(rows, colWidths=[width * 0.32, width * 0.68])
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, _hex(SECTION_BORDER_COLOR)),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("TOPPADDING", (0, 0), (-1, -1), 3),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        return table

    def _grid(self, node: TableNode) -> list[Flowable]:
        items: list[Flowable] = []
        if node.caption:
            items.append(Paragraph(escape(node.caption), self._styles["caption"]))
        header = [Paragraph(f"<b>{escape(c)}</b>", self._styles["cell"]) for c in node.columns]
        rows: list[list[Any]] = [header]
        rows += [[Paragraph(escape(str(cell)), self._styles["cell"]) for cell in row] for row in node.rows]
        col_width = self._content_width() / max(len(node.columns), 1)
        table = Table(rows, colWidths=[col_width] * len(node.columns), repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), _hex(HEADER_BG_COLOR)),
                    ("TEXTCOLOR", (0, 0), (-1, 0), _hex(HEADER_TEXT_COLOR)),
                    ("GRID", (0, 0), (-1, -1), 0.5, _hex(SECTION_BORDER_COLOR)),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 3),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [rl_colors.white, _hex(ROW_ALT_BG_COLOR)]),
                ]
            )
        )
        items.append(table)
        return items

    def _bar_chart(self, block: Block) -> Table:
        scale = BAR_TRACK_WIDTH / self._bar_max_px
        rows = []
        for bar in block.bars:
            drawing = Drawing(BAR_TRACK_WIDTH, _BAR_HEIGHT)
            drawing.add(
                Rect(0, 0, bar.height * scale, _BAR_HEIGHT, fillColor=_hex(BAR_COLOR), strokeColor=None)
            )
            rows.append(
                [
                    Paragraph(escape(bar.label), self._styles["cell"]),
                    drawing,
                    Paragraph(f"{bar.value:g}", self._styles["cell"]),
                ]
            )
        width = self._content_width()
        table = Table(rows, colWidths=[width - BAR_TRACK_WIDTH - 0.6 * inch, BAR_TRACK_WIDTH, 0.6 * inch])
        table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "MIDDLE")]))
        return table

    def _image(self, ref: str, caption: str, assets: Mapping[str, bytes]) -> Flowable:
        data = assets.get(ref)
        if data is None:
            return Paragraph(f"Image: {escape(caption or ref)}", self._styles["caption"])
        return Image(
            BytesIO(data),
            width=self._content_width() / 2,
            height=_IMAGE_MAX_HEIGHT,
            kind="proportional",
        )

    # ── Header / footer ──────────────────────────────────────────────

    def _header_footer(self, canvas: Any, doc: Any) -> None:
        canvas.saveState()
        width, height = self._page_size

        canvas.setFont(f"{self._config.font_family}-Bold", 8)
        canvas.setFillColor(_hex(BRAND_COLOR))
        canvas.drawString(self._margin, height - self._margin + 6, CONFIDENTIAL_FOOTER)

        canvas.setFont(self._config.font_family, 8)
        canvas.setFillColor(rl_colors.grey)
        canvas.drawString(self._margin, self._margin - 14, f"Page {canvas.getPageNumber()}")
        if self._footer_text:
            canvas.drawRightString(width - self._margin, self._margin - 14, self._footer_text)

        canvas.restoreState()

    # ── Helpers ───────────────────────────────────────────────────────

    def _content_width(self) -> float:
        return float(self._page_size[0]) - 2 * self._margin
