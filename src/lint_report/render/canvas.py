"""Drawing surface for the report: recorded pages of draw operations.

The layout code never talks to fpdf2 directly. It draws onto a ``Canvas``,
which records each rectangle, circle, line and text run on the current
page and uses fpdf2 core-font metrics for measuring and wrapping text.
The finished ``Document`` is replayed onto an ``FPDF`` instance on export,
so earlier pages can still be drawn on (footers) before anything is
encoded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from fpdf import FPDF

from lint_report.render import theme

log = logging.getLogger(__name__)

RGB = tuple[int, int, int]

FONT_FAMILY = "Helvetica"


# ── Draw operations ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    w: float
    h: float
    fill: RGB | None = None
    stroke: RGB | None = None
    line_width: float = 0.2
    tag: str | None = None


@dataclass(frozen=True)
class CircleOp:
    x: float            # centre
    y: float
    r: float
    fill: RGB | None = None
    stroke: RGB | None = None
    line_width: float = 0.2
    tag: str | None = None


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB = theme.GRAY_300
    width: float = 0.2
    tag: str | None = None


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float            # baseline
    text: str
    size: float = 10
    style: str = ""     # "", "B", "I", "BI"
    color: RGB = theme.BODY
    align: str = "L"    # "L", "C" or "R" relative to x
    tag: str | None = None


DrawOp = Union[RectOp, CircleOp, LineOp, TextOp]


@dataclass(frozen=True)
class Page:
    number: int         # 1-based
    width: float
    height: float
    ops: tuple[DrawOp, ...] = ()

    def tagged(self, tag: str) -> list[DrawOp]:
        return [op for op in self.ops if op.tag == tag]

    def texts(self, tag: str | None = None) -> list[str]:
        """Text runs on this page, optionally limited to one block tag."""
        return [
            op.text for op in self.ops
            if isinstance(op, TextOp) and (tag is None or op.tag == tag)
        ]


@dataclass(frozen=True)
class Document:
    """Finished report: an ordered sequence of pages."""

    pages: tuple[Page, ...]
    title: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def tagged(self, tag: str) -> list[DrawOp]:
        return [op for page in self.pages for op in page.tagged(tag)]

    def texts(self, tag: str | None = None) -> list[str]:
        return [t for page in self.pages for t in page.texts(tag)]

    def to_pdf_bytes(self) -> bytes:
        """Encode the document as PDF with fpdf2."""
        pdf = FPDF(unit="mm", format=(theme.PAGE_WIDTH, theme.PAGE_HEIGHT))
        pdf.set_auto_page_break(auto=False)
        pdf.set_margins(0, 0, 0)
        if self.title:
            pdf.set_title(self.title)
        for page in self.pages:
            pdf.add_page(format=(page.width, page.height))
            for op in page.ops:
                _replay(pdf, op)
        return bytes(pdf.output())

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_pdf_bytes())
        return path


def _style(fill: RGB | None, stroke: RGB | None) -> str:
    if fill and stroke:
        return "DF"
    return "F" if fill else "D"


def _replay(pdf: FPDF, op: DrawOp) -> None:
    if isinstance(op, TextOp):
        if not op.text:
            return
        pdf.set_font(FONT_FAMILY, op.style, op.size)
        pdf.set_text_color(*op.color)
        x = op.x
        if op.align == "C":
            x -= pdf.get_string_width(op.text) / 2
        elif op.align == "R":
            x -= pdf.get_string_width(op.text)
        pdf.text(x, op.y, op.text)
    elif isinstance(op, RectOp):
        _apply_paint(pdf, op.fill, op.stroke, op.line_width)
        pdf.rect(op.x, op.y, op.w, op.h, style=_style(op.fill, op.stroke))
    elif isinstance(op, CircleOp):
        _apply_paint(pdf, op.fill, op.stroke, op.line_width)
        pdf.ellipse(op.x - op.r, op.y - op.r, 2 * op.r, 2 * op.r, style=_style(op.fill, op.stroke))
    elif isinstance(op, LineOp):
        pdf.set_draw_color(*op.color)
        pdf.set_line_width(op.width)
        pdf.line(op.x1, op.y1, op.x2, op.y2)


def _apply_paint(pdf: FPDF, fill: RGB | None, stroke: RGB | None, line_width: float) -> None:
    if fill:
        pdf.set_fill_color(*fill)
    if stroke:
        pdf.set_draw_color(*stroke)
        pdf.set_line_width(line_width)


# ── Canvas ─────────────────────────────────────────────────────────────────

class Canvas:
    """Records draw calls page by page; measures text with fpdf2 metrics."""

    def __init__(self, width: float = theme.PAGE_WIDTH, height: float = theme.PAGE_HEIGHT):
        self.width = width
        self.height = height
        self._pages: list[list[DrawOp]] = []
        self._current = -1
        # Only used for font metrics, never output.
        self._metrics = FPDF(unit="mm", format=(width, height))

    # ── Pages ──────────────────────────────────────────────────────────

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_page(self) -> int:
        """0-based index of the page being drawn on (-1 before the first)."""
        return self._current

    def add_page(self) -> int:
        self._pages.append([])
        self._current = len(self._pages) - 1
        return self._current

    def set_page(self, index: int) -> None:
        if not 0 <= index < len(self._pages):
            raise IndexError(f"page {index} out of range (0..{len(self._pages) - 1})")
        self._current = index

    # ── Primitives ─────────────────────────────────────────────────────

    def _draw(self, op: DrawOp) -> None:
        if self._current < 0:
            raise RuntimeError("No page open, call add_page() first")
        self._pages[self._current].append(op)

    def rect(self, x: float, y: float, w: float, h: float, *,
             fill: RGB | None = None, stroke: RGB | None = None,
             line_width: float = 0.2, tag: str | None = None) -> None:
        self._draw(RectOp(x, y, w, h, fill, stroke, line_width, tag))

    def circle(self, x: float, y: float, r: float, *,
               fill: RGB | None = None, stroke: RGB | None = None,
               line_width: float = 0.2, tag: str | None = None) -> None:
        self._draw(CircleOp(x, y, r, fill, stroke, line_width, tag))

    def line(self, x1: float, y1: float, x2: float, y2: float, *,
             color: RGB = theme.GRAY_300, width: float = 0.2, tag: str | None = None) -> None:
        self._draw(LineOp(x1, y1, x2, y2, color, width, tag))

    def text(self, x: float, y: float, text: str, *, size: float = 10, style: str = "",
             color: RGB = theme.BODY, align: str = "L", tag: str | None = None) -> None:
        self._draw(TextOp(x, y, text, size, style, color, align, tag))

    # ── Text measurement ───────────────────────────────────────────────

    def string_width(self, text: str, size: float = 10, style: str = "") -> float:
        self._metrics.set_font(FONT_FAMILY, style, size)
        return self._metrics.get_string_width(text)

    def wrap(self, text: str, max_width: float, size: float = 10, style: str = "") -> list[str]:
        """Greedy word wrap to ``max_width``; over-long words are split."""
        if not text:
            return []
        self._metrics.set_font(FONT_FAMILY, style, size)
        width = self._metrics.get_string_width
        lines: list[str] = []
        current = ""
        for word in text.split(" "):
            if not word:
                continue
            candidate = f"{current} {word}" if current else word
            if width(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
                current = ""
            if width(word) <= max_width:
                current = word
                continue
            chunk = ""
            for ch in word:
                if not chunk or width(chunk + ch) <= max_width:
                    chunk += ch
                else:
                    lines.append(chunk)
                    chunk = ch
            current = chunk
        if current:
            lines.append(current)
        return lines

    # ── Result ─────────────────────────────────────────────────────────

    def document(self, title: str = "") -> Document:
        pages = tuple(
            Page(number=i + 1, width=self.width, height=self.height, ops=tuple(ops))
            for i, ops in enumerate(self._pages)
        )
        log.debug("Canvas finished with %d page(s)", len(pages))
        return Document(pages=pages, title=title)
