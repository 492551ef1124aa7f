"""Page geometry, colour palette and truncation limits for the PDF report.

All measurements are millimetres on an A4 portrait page (fpdf2 defaults).
"""

from __future__ import annotations

# ── Page geometry ──────────────────────────────────────────────────────────

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN  # 170

CONTENT_TOP = 25.0        # cursor after a page break
BOTTOM_MARGIN = 15.0
FOOTER_RESERVE = 20.0     # space kept free for the footer band
HEADER_HEIGHT = 70.0      # page-1 banner

# Footer band positions (baselines)
FOOTER_RULE_Y = PAGE_HEIGHT - 30
FOOTER_BRAND_Y = PAGE_HEIGHT - 22
FOOTER_TAGLINE_Y = PAGE_HEIGHT - 16
WATERMARK_Y = PAGE_HEIGHT - 6

# Block heights and gaps
SECTION_HEIGHT = 10.0
SECTION_GAP = 5.0
INFO_ROW_HEIGHT = 9.0
INFO_ROW_GAP = 1.5
SCORE_CARD_HEIGHT = 32.0
FILE_CARD_HEIGHT = 16.0
ISSUE_CARD_HEIGHT = 14.0
SUGGESTION_HEIGHT = 7.0
RECOMMENDATION_HEADER_HEIGHT = 11.0
CARD_GAP = 3.0
LINE_HEIGHT = 5.0
TEXT_PADDING = 6.0

# ── Palette (RGB) ──────────────────────────────────────────────────────────

PRIMARY = (37, 99, 235)
PRIMARY_DARK = (30, 64, 175)
DANGER = (220, 38, 38)
WARNING = (217, 119, 6)
SUCCESS = (22, 163, 74)
WHITE = (255, 255, 255)
BODY = (31, 41, 55)

GRAY_50 = (249, 250, 251)
GRAY_200 = (229, 231, 235)
GRAY_300 = (209, 213, 219)
GRAY_400 = (156, 163, 175)
GRAY_500 = (107, 114, 128)
GRAY_600 = (75, 85, 99)
GRAY_700 = (55, 65, 81)

# tier -> (accent_rgb, tint_rgb)
TIER_COLORS: dict[str, tuple[tuple[int, int, int], tuple[int, int, int]]] = {
    "danger":  (DANGER, (254, 226, 226)),
    "warning": (WARNING, (254, 243, 199)),
    "success": (SUCCESS, (220, 252, 231)),
}

# ── Fixed text ────────────────────────────────────────────────────────────

REPORT_TITLE = "Technical Debt Analysis Report"
REPORT_SUBTITLE = "AI-powered code quality assessment"
ENGINE_LABEL = "Gemini 2.0 Flash AI"
BRAND_LINE = "Powered by Lint"
TAGLINE = "Professional Code Analysis Platform"
WATERMARK = "Lint - Confidential technical debt report"

# ── Truncation limits ─────────────────────────────────────────────────────

MAX_FILES = 8
MAX_ISSUES_PER_FILE = 2
MAX_ISSUE_LINES = 1
MAX_SUGGESTION_LINES = 1
MAX_RECOMMENDATION_LINES = 2
MAX_IMPACT_LINES = 1
MAX_INFO_VALUE_LEN = 60

# File paths longer than PATH_ELIDE_OVER are shown as "..." + last PATH_KEEP chars
PATH_ELIDE_OVER = 38
PATH_KEEP = 35
