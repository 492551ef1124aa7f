"""Render a technical-debt analysis as a paginated PDF report.

``generate_report`` lays the analysis out onto a recording ``Canvas`` and
returns the finished ``Document``; ``render_pdf`` additionally encodes it
with fpdf2 and writes the file.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from lint_report.models import AnalysisResult, FileAnalysis, Issue, Recommendation
from lint_report.render import theme
from lint_report.render._helpers import (
    elide_path,
    format_timestamp,
    sanitize,
    tier_for,
)
from lint_report.render.canvas import RGB, Canvas, Document

log = logging.getLogger(__name__)

_W = theme.PAGE_WIDTH
_X = theme.MARGIN
_CW = theme.CONTENT_WIDTH

_SUGGESTION_TINT = (240, 253, 244)


class ReportRenderError(RuntimeError):
    """Rendering failed; ``section`` names the block being laid out."""

    def __init__(self, section: str):
        super().__init__(f"Failed to render report section {section!r}")
        self.section = section


@dataclass
class LayoutState:
    cursor: float = theme.CONTENT_TOP
    page_index: int = 0


class ReportBuilder:
    """Layout primitives over a ``Canvas`` sharing one vertical cursor."""

    def __init__(self, canvas: Canvas | None = None):
        self.canvas = canvas or Canvas()
        self.state = LayoutState()

    # ── Pagination ─────────────────────────────────────────────────────

    @property
    def available(self) -> float:
        """Vertical space left above the footer band on the current page."""
        return (
            self.canvas.height - self.state.cursor
            - theme.BOTTOM_MARGIN - theme.FOOTER_RESERVE
        )

    def start(self) -> None:
        self.canvas.add_page()
        self.state = LayoutState(cursor=theme.CONTENT_TOP, page_index=self.canvas.current_page)
        self._watermark()

    def ensure_space(self, required: float) -> bool:
        """Break to a new page unless ``required`` mm fit; True on a break."""
        if required <= self.available:
            return False
        self.state.page_index = self.canvas.add_page()
        self.state.cursor = theme.CONTENT_TOP
        self._watermark()
        log.debug("Page break before %.1fmm block -> page %d", required, self.state.page_index + 1)
        return True

    def _watermark(self) -> None:
        self.canvas.text(_X, theme.WATERMARK_Y, theme.WATERMARK,
                         size=6, color=theme.GRAY_400, tag="watermark")

    @contextmanager
    def rendering(self, section: str):
        """Attach the section name to any failure raised while drawing it."""
        try:
            yield
        except ReportRenderError:
            raise
        except Exception as exc:
            log.exception("Report rendering failed in section %r", section)
            raise ReportRenderError(section) from exc

    # ── Header ─────────────────────────────────────────────────────────

    def header(self, project_name: str, score: int | None = None) -> None:
        """Page-1 banner with title, subtitle and the overall score badge."""
        c = self.canvas
        c.rect(0, 0, _W, theme.HEADER_HEIGHT, fill=theme.PRIMARY, tag="header")
        c.rect(0, theme.HEADER_HEIGHT - 2, _W, 2, fill=theme.PRIMARY_DARK)

        c.text(_X, 30, theme.REPORT_TITLE, size=18, style="B", color=theme.WHITE, tag="header")
        c.text(_X, 40, theme.REPORT_SUBTITLE, size=11, color=theme.WHITE, tag="header")
        name = sanitize(project_name, 50)
        if name:
            c.text(_X, 52, name, size=10, style="B", color=theme.WHITE, tag="header")

        if score is not None:
            tier = tier_for(score)
            cx, cy, r = _W - _X - 25, 30, 20
            c.circle(cx, cy, r, fill=tier.accent, stroke=theme.WHITE, line_width=0.8, tag="header_score")
            c.text(cx, cy + 3, str(score), size=18, style="B", color=theme.WHITE, align="C", tag="header_score")
            c.text(cx, cy + 10, "/100", size=8, color=theme.WHITE, align="C", tag="header_score")
            c.text(cx, cy + r + 8, tier.debt_label, size=8, style="B", color=theme.WHITE, align="C",
                   tag="header_score")

        self.state.cursor = theme.HEADER_HEIGHT + 10

    # ── Sections and rows ──────────────────────────────────────────────

    def section_header(self, title: str, accent: RGB = theme.PRIMARY,
                       keep_with: float = theme.LINE_HEIGHT) -> None:
        """Section title block; ``keep_with`` is the height of the first block under it."""
        self.ensure_space(theme.SECTION_HEIGHT + theme.SECTION_GAP + keep_with)
        y = self.state.cursor
        c = self.canvas
        c.rect(_X, y, _CW, theme.SECTION_HEIGHT, fill=theme.GRAY_50, tag="section")
        c.rect(_X, y, 3, theme.SECTION_HEIGHT, fill=accent)
        c.text(_X + 7, y + 6.8, sanitize(title), size=13, style="B", tag="section")
        self.state.cursor += theme.SECTION_HEIGHT + theme.SECTION_GAP

    def info_row(self, label: str, value: str) -> None:
        h = theme.INFO_ROW_HEIGHT
        self.ensure_space(h)
        y = self.state.cursor
        c = self.canvas
        c.rect(_X, y, _CW, h, fill=theme.WHITE, stroke=theme.GRAY_200, tag="info_row")
        c.rect(_X, y, 1.5, h, fill=theme.PRIMARY)
        c.text(_X + 5, y + 5.8, sanitize(label), size=9, style="B", color=theme.GRAY_700, tag="info_row")
        c.text(_X + 45, y + 5.8, sanitize(value, theme.MAX_INFO_VALUE_LEN), size=9,
               color=theme.GRAY_600, tag="info_row")
        self.state.cursor += h + theme.INFO_ROW_GAP

    def score_card(self, title: str, score: int) -> None:
        tier = tier_for(score)
        h = theme.SCORE_CARD_HEIGHT
        self.ensure_space(h)
        y = self.state.cursor
        c = self.canvas
        c.rect(_X, y, _CW, h, fill=tier.tint, stroke=tier.accent, tag="score_card")
        c.rect(_X, y, 4, h, fill=tier.accent)

        c.text(_X + 10, y + 9, sanitize(title), size=11, style="B", tag="score_card")
        c.text(_X + _CW - 8, y + 9, tier.debt_label, size=10, style="B", color=tier.accent,
               align="R", tag="score_card")

        value = str(score)
        c.text(_X + 10, y + 25, value, size=26, style="B", color=tier.accent, tag="score_card")
        value_w = c.string_width(value, size=26, style="B")
        c.text(_X + 12 + value_w, y + 25, "/100", size=10, color=theme.GRAY_500, tag="score_card")

        bar_x, bar_y, bar_w, bar_h = _X + 60, y + 19, _CW - 68, 4
        c.rect(bar_x, bar_y, bar_w, bar_h, fill=theme.GRAY_200)
        if score > 0:
            c.rect(bar_x, bar_y, bar_w * min(score, 100) / 100, bar_h, fill=tier.accent)

        self.state.cursor += h + theme.SECTION_GAP

    def paragraph(self, text: str, accent: RGB = theme.PRIMARY) -> int:
        """Wrapped text block, paginated line by line. Returns the line count."""
        text = sanitize(text)
        if not text:
            return 0
        pad = theme.TEXT_PADDING
        lh = theme.LINE_HEIGHT
        lines = self.canvas.wrap(text, _CW - 2 * pad, size=10)

        self.ensure_space(pad / 2 + lh)
        self.state.cursor += pad / 2
        for line in lines:
            self.ensure_space(lh)
            y = self.state.cursor
            self.canvas.rect(_X, y, 1.5, lh, fill=accent)
            self.canvas.text(_X + pad, y + 3.8, line, size=10, color=theme.GRAY_700, tag="paragraph")
            self.state.cursor += lh
        self.state.cursor += pad / 2 + theme.CARD_GAP
        return len(lines)

    def gap(self, height: float) -> None:
        self.state.cursor += height

    def note(self, text: str) -> None:
        self.ensure_space(theme.LINE_HEIGHT)
        self.canvas.text(_X + 2, self.state.cursor + 3.8, sanitize(text), size=8, style="I",
                         color=theme.GRAY_500, tag="note")
        self.state.cursor += theme.LINE_HEIGHT + theme.CARD_GAP

    # ── Cards ──────────────────────────────────────────────────────────

    def file_card(self, fa: FileAnalysis) -> None:
        tier = tier_for(fa.debt_score)
        h = theme.FILE_CARD_HEIGHT
        self.ensure_space(h)
        y = self.state.cursor
        c = self.canvas
        c.rect(_X, y, _CW, h, fill=theme.WHITE, stroke=theme.GRAY_300, tag="file_card")
        c.rect(_X, y, 3, h, fill=tier.accent, tag="file_card_accent")

        c.text(_X + 7, y + 7, elide_path(fa.file_path), size=10, style="B", tag="file_card")
        count = len(fa.issues)
        c.text(_X + 7, y + 12.5, f"{count} issue{'s' if count != 1 else ''} found", size=8,
               color=theme.GRAY_500, tag="file_card")

        badge_x = _X + _CW - 30
        c.rect(badge_x, y + 3.5, 24, 9, fill=tier.tint, stroke=tier.accent, tag="file_card_badge")
        c.text(badge_x + 12, y + 9.6, f"{fa.debt_score}/100", size=9, style="B", color=tier.accent,
               align="C", tag="file_card")

        self.state.cursor += h + theme.CARD_GAP

    def _fit(self, text: str, max_width: float, size: float, style: str = "") -> str:
        """Cut ``text`` to ``max_width`` mm, ending in '...' when shortened."""
        width = self.canvas.string_width
        if width(text, size, style) <= max_width:
            return text
        while text and width(text + "...", size, style) > max_width:
            text = text[:-1]
        return text.rstrip() + "..."

    def _badge(self, x: float, y: float, label: str, color: RGB) -> float:
        """Filled pill with white text; returns its width."""
        w = self.canvas.string_width(label, size=7, style="B") + 6
        self.canvas.rect(x, y, w, 4.5, fill=color)
        self.canvas.text(x + w / 2, y + 3.3, label, size=7, style="B", color=theme.WHITE, align="C")
        return w

    def issue_card(self, issue: Issue) -> None:
        tier = tier_for(issue.severity)
        h = theme.ISSUE_CARD_HEIGHT
        x0 = _X + 8
        w = _CW - 8
        desc = self.canvas.wrap(sanitize(issue.description), w - 10, size=8)[:theme.MAX_ISSUE_LINES]

        self.ensure_space(h)
        y = self.state.cursor
        c = self.canvas
        c.rect(x0, y, w, h, fill=theme.GRAY_50, stroke=theme.GRAY_200, tag="issue_card")
        c.rect(x0, y, 2, h, fill=tier.accent, tag="issue_card_accent")

        badge_w = self._badge(x0 + 5, y + 2.5, issue.severity.upper(), tier.accent)
        title = self._fit(sanitize(issue.type) or "Issue", w - badge_w - 12, size=9, style="B")
        c.text(x0 + 8 + badge_w, y + 5.9, title, size=9, style="B",
               tag="issue_card")
        for i, line in enumerate(desc):
            c.text(x0 + 5, y + 11 + i * 4, line, size=8, color=theme.GRAY_600, tag="issue_card")

        self.state.cursor += h + 2

    def suggestion_line(self, text: str) -> None:
        text = sanitize(text)
        if not text:
            return
        x0 = _X + 12
        w = _CW - 12
        lines = self.canvas.wrap(f"Suggestion: {text}", w - 6, size=8, style="I")
        h = theme.SUGGESTION_HEIGHT
        for line in lines[:theme.MAX_SUGGESTION_LINES]:
            self.ensure_space(h)
            y = self.state.cursor
            self.canvas.rect(x0, y, w, h - 1.5, fill=_SUGGESTION_TINT, tag="suggestion")
            self.canvas.text(x0 + 3, y + 3.8, line, size=8, style="I", color=theme.SUCCESS,
                             tag="suggestion")
            self.state.cursor += h

    def recommendation_card(self, rec: Recommendation) -> None:
        tier = tier_for(rec.priority)
        c = self.canvas
        rh = theme.RECOMMENDATION_HEADER_HEIGHT
        lh = theme.LINE_HEIGHT
        text_w = _CW - 14

        self.ensure_space(rh)
        y = self.state.cursor
        c.rect(_X, y, _CW, rh, fill=tier.tint, stroke=tier.accent, tag="recommendation_card")
        c.rect(_X, y, 3, rh, fill=tier.accent, tag="recommendation_accent")
        label = f"{rec.priority.upper()} PRIORITY"
        label_w = c.string_width(label, size=7, style="B") + 6
        badge_x = _X + _CW - label_w - 4
        category = self._fit(sanitize(rec.category) or "General", badge_x - _X - 11, size=10, style="B")
        c.text(_X + 7, y + 7, category, size=10, style="B", tag="recommendation_card")
        self._badge(badge_x, y + 3.2, label, tier.accent)
        self.state.cursor += rh

        body = [
            (line, 9, "", theme.GRAY_700)
            for line in c.wrap(sanitize(rec.description), text_w, size=9)[:theme.MAX_RECOMMENDATION_LINES]
        ]
        impact = sanitize(rec.impact)
        if impact:
            body += [
                (line, 8, "I", theme.GRAY_500)
                for line in c.wrap(f"Impact: {impact}", text_w, size=8, style="I")[:theme.MAX_IMPACT_LINES]
            ]

        for line, size, style, color in body:
            self.ensure_space(lh)
            y = self.state.cursor
            c.rect(_X, y, 3, lh, fill=tier.accent)
            c.text(_X + 7, y + 3.8, line, size=size, style=style, color=color,
                   tag="recommendation_card")
            self.state.cursor += lh

        self.state.cursor += theme.CARD_GAP + 1

    # ── Footer pass ────────────────────────────────────────────────────

    def stamp_footers(self) -> None:
        """Draw the footer band on every page; run once, after all content."""
        c = self.canvas
        total = c.page_count
        last = c.current_page
        for index in range(total):
            c.set_page(index)
            c.line(0, theme.FOOTER_RULE_Y, _W, theme.FOOTER_RULE_Y, color=theme.PRIMARY, width=0.6,
                   tag="footer")
            c.text(_W / 2, theme.FOOTER_BRAND_Y, theme.BRAND_LINE, size=8, style="B",
                   color=theme.PRIMARY, align="C", tag="footer")
            c.text(_W - _X, theme.FOOTER_BRAND_Y, f"Page {index + 1} of {total}", size=8,
                   color=theme.GRAY_500, align="R", tag="footer")
            c.text(_W / 2, theme.FOOTER_TAGLINE_Y, theme.TAGLINE, size=7, color=theme.GRAY_500,
                   align="C", tag="footer")
        c.set_page(last)


# ── Document assembly ─────────────────────────────────────────────────────

def generate_report(
    project_name: str,
    analysis: AnalysisResult,
    recipient_email: str,
    *,
    generated_at: datetime | None = None,
) -> Document:
    """Lay out the full report and return the finished document.

    Args:
        project_name: Shown in the banner and the info rows.
        analysis: The analysis to render.
        recipient_email: Shown as "Generated For".
        generated_at: Timestamp for the info rows. Defaults to now.

    Raises:
        ReportRenderError: a section failed to render; the original
            exception is chained as ``__cause__``.
    """
    generated_at = generated_at or datetime.now()
    builder = ReportBuilder()

    with builder.rendering("Header"):
        builder.start()
        builder.header(project_name, analysis.overall_debt_score)

    files = analysis.file_analyses
    with builder.rendering("Project Information"):
        builder.section_header("Project Information", keep_with=theme.INFO_ROW_HEIGHT)
        builder.info_row("Project:", project_name)
        builder.info_row("Generated:", format_timestamp(generated_at))
        builder.info_row("Generated For:", recipient_email)
        builder.info_row("Engine:", theme.ENGINE_LABEL)
        builder.info_row("Files Analyzed:", f"{len(files)} file{'s' if len(files) != 1 else ''}")

    with builder.rendering("Overall Assessment"):
        score = analysis.overall_debt_score
        builder.section_header("Overall Assessment", tier_for(score).accent,
                               keep_with=theme.SCORE_CARD_HEIGHT)
        builder.score_card("Overall Technical Debt Score", score)

    if sanitize(analysis.summary):
        with builder.rendering("Executive Summary"):
            builder.section_header("Executive Summary",
                                   keep_with=theme.TEXT_PADDING / 2 + theme.LINE_HEIGHT)
            builder.paragraph(analysis.summary)

    if files:
        with builder.rendering("Detailed File Analysis"):
            builder.section_header("Detailed File Analysis", theme.WARNING,
                                   keep_with=theme.FILE_CARD_HEIGHT)
            for fa in files[:theme.MAX_FILES]:
                builder.file_card(fa)
                for issue in fa.issues[:theme.MAX_ISSUES_PER_FILE]:
                    builder.issue_card(issue)
                    builder.suggestion_line(issue.suggestion)
                builder.gap(theme.CARD_GAP)
            hidden = len(files) - theme.MAX_FILES
            if hidden > 0:
                builder.note(f"+{hidden} more file{'s' if hidden != 1 else ''} not shown")

    if analysis.recommendations:
        with builder.rendering("Priority Recommendations"):
            builder.section_header("Priority Recommendations", theme.SUCCESS,
                                   keep_with=theme.RECOMMENDATION_HEADER_HEIGHT)
            for rec in analysis.recommendations:
                builder.recommendation_card(rec)

    with builder.rendering("Footer"):
        builder.stamp_footers()

    document = builder.canvas.document(title=f"Technical Debt Report - {sanitize(project_name, 60)}")
    log.info(
        "Report laid out: %d page(s), %d file(s) shown of %d, %d recommendation(s)",
        document.page_count, min(len(files), theme.MAX_FILES), len(files),
        len(analysis.recommendations),
    )
    return document


def render_pdf(
    project_name: str,
    analysis: AnalysisResult,
    recipient_email: str,
    output_path: Path,
    *,
    generated_at: datetime | None = None,
) -> Document:
    """Generate the report and write it to ``output_path`` as PDF."""
    document = generate_report(project_name, analysis, recipient_email, generated_at=generated_at)
    document.save(Path(output_path))
    log.info("PDF written to %s", output_path)
    return document
