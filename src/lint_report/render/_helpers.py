"""Shared helpers for the report renderer: text sanitizing, tiers, labels."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum

from lint_report.models import normalize_level
from lint_report.render import theme


# Unicode -> ASCII substitutions for PDF core fonts (latin-1 only).
_UNICODE_SUBS = str.maketrans({
    "\u2018": "'",    # left single quote
    "\u2019": "'",    # right single quote / apostrophe
    "\u201a": "'",    # low single quote
    "\u201b": "'",    # reversed single quote
    "\u2032": "'",    # prime
    "\u201c": '"',    # left double quote
    "\u201d": '"',    # right double quote
    "\u201e": '"',    # low double quote
    "\u201f": '"',    # reversed double quote
    "\u2033": '"',    # double prime
    "\u2014": "-",    # em dash
    "\u2013": "-",    # en dash
    "\u2012": "-",    # figure dash
    "\u2011": "-",    # non-breaking hyphen
    "\u2010": "-",    # hyphen
    "\u2212": "-",    # minus sign
    "\u2026": "...",  # ellipsis
    "\n": " ",
    "\r": " ",
    "\t": " ",
    "\v": " ",
    "\f": " ",
})

# Anything that is neither printable ASCII nor the Latin-1 supplement.
_NON_LATIN1_RE = re.compile(r"[^\x20-\x7e\xa0-\xff]")

_ELLIPSIS = "..."


def sanitize(text, max_len: int | None = None) -> str:
    """Make externally supplied text safe for latin-1 PDF core fonts.

    Typographic punctuation is folded to ASCII, everything outside the
    printable Latin-1 range is dropped and the result is trimmed. With
    ``max_len`` the text is cut to fit, ending in ``...``.
    """
    if text is None:
        return ""
    result = str(text).translate(_UNICODE_SUBS)
    result = _NON_LATIN1_RE.sub("", result).strip()
    if max_len is not None and len(result) > max_len:
        if max_len <= len(_ELLIPSIS):
            return result[:max_len].rstrip()
        result = result[:max_len - len(_ELLIPSIS)].rstrip() + _ELLIPSIS
    return result


class Tier(str, Enum):
    """Colour tier shared by scores, severities and priorities."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def debt_label(self) -> str:
        return f"{self.label} Technical Debt"

    @property
    def accent(self) -> tuple[int, int, int]:
        return theme.TIER_COLORS[self.value][0]

    @property
    def tint(self) -> tuple[int, int, int]:
        return theme.TIER_COLORS[self.value][1]


_TIER_LABELS = {
    Tier.SUCCESS: "Low",
    Tier.WARNING: "Moderate",
    Tier.DANGER: "High",
}

_LEVEL_TIERS = {
    "low": Tier.SUCCESS,
    "medium": Tier.WARNING,
    "high": Tier.DANGER,
}


def tier_for(value: int | float | str | None) -> Tier:
    """Map a 0-100 score or a low/medium/high level to its colour tier.

    Scores above 70 are danger, above 40 warning, everything else success.
    Strings go through level normalisation, so None and unknown values
    count as "medium".
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value > 70:
            return Tier.DANGER
        if value > 40:
            return Tier.WARNING
        return Tier.SUCCESS
    return _LEVEL_TIERS[normalize_level(value)]


def elide_path(path: str) -> str:
    """Shorten long file paths to their tail: '...' + last 35 characters."""
    path = sanitize(path)
    if len(path) > theme.PATH_ELIDE_OVER:
        return _ELLIPSIS + path[-theme.PATH_KEEP:]
    return path


def format_timestamp(moment: datetime) -> str:
    """Human date/time for the info rows, e.g. 'Oct 19, 2026 at 3:05 PM'."""
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year} at {hour}:{moment:%M} {moment:%p}"
