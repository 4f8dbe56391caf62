"""Style constants for PDF output."""

from __future__ import annotations

# Plain hex strings; the formatter converts them to reportlab colors.

BRAND_COLOR = "#1F4E79"
HEADER_BG_COLOR = "#FFFF99"
HEADER_TEXT_COLOR = "#000000"
SECTION_BORDER_COLOR = "#7F7F7F"
ROW_ALT_BG_COLOR = "#F5F5F5"
ERROR_TEXT_COLOR = "#B91C1C"
BAR_COLOR = "#2E75B6"

PASS_MARK_COLOR = "#15803D"
FAIL_MARK_COLOR = "#B91C1C"

# Width of the bar-chart track in points at ``bar_max_px``.
BAR_TRACK_WIDTH = 180.0
