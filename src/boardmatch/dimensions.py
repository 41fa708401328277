"""Surfboard dimension parsing: free-text lengths → inches.

Handles:
- Full blocks with an x separator (5'8 x 20 1/4 x 2 1/2, 5'10 X 19 1/8 X 2 3/8")
- Two-part blocks (5'8 x 20 13/16)
- Prime notation (5'8, 5'8", 5'8 1/2, 5')
- Spelled-out notation (5ft 8in, 5 ft 8 in, 6ft)
- Dash notation (5-8, 5-10) limited to plausible board sizes

Patterns are tried in the order above; the first hit wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_FEET = r"(\d+)['’′](?![A-Za-z])"
_INCHES = r"(\d+(?:\.\d+)?(?:\s+\d+/\d+)?)?"
_INCH_MARK = r"[\"”″]?"
# One width or thickness figure: 13/16, 20, 19.5, 20 13/16
_NUMBER = r"(\d+/\d+|\d+(?:\.\d+)?(?:\s+\d+/\d+)?)"

# 5'8 x 20 1/4 x 2 1/2 → feet, inches, width, thickness
_FULL_RE = re.compile(
    _FEET + r"\s*" + _INCHES + _INCH_MARK
    + r"\s*[xX×]\s*" + _NUMBER + _INCH_MARK + r"\s*[xX×]\s*" + _NUMBER
)
# 5'8 x 20 13/16 → feet, inches, width
_TWO_PART_RE = re.compile(
    _FEET + r"\s*" + _INCHES + _INCH_MARK + r"\s*[xX×]\s*" + _NUMBER
)
# 5'8, 5'8", 5'10 1/2, 5'
_PRIME_RE = re.compile(_FEET + r"\s*" + _INCHES + _INCH_MARK)
# 5ft 8in, 6 ft
_FT_RE = re.compile(
    r"(\d+)\s*(?:ft|feet)(?![a-z])\s*"
    r"(\d+(?:\.\d+)?(?:\s+\d+/\d+)?)?\s*(?:in(?:ch(?:es)?)?(?![a-z]))?",
    re.IGNORECASE,
)
# 5-8 (5 feet 8 inches)
_DASH_RE = re.compile(r"\b(\d+)-(\d{1,2})\b")

_DASH_FEET_RANGE = (4, 12)
_DASH_INCH_RANGE = (0, 11)

_FRACTION_RE = re.compile(r"^(?:(\d+)\s+)?(\d+)/(\d+)$")
_DECIMAL_RE = re.compile(r"^\d+(?:\.\d+)?$")

# Patterns used when scrubbing dimensions out of a title, in priority order
DIMENSION_PATTERNS: tuple[re.Pattern[str], ...] = (
    _FULL_RE,
    _TWO_PART_RE,
    _PRIME_RE,
    _FT_RE,
)


@dataclass(frozen=True)
class NormalizedDimensions:
    """Board length resolved to inches."""

    length_inches: float
    original: str


@dataclass(frozen=True)
class ParsedDimensions:
    """Length, width and thickness broken out of a dimension string."""

    length_feet: int
    length_inches: float
    width_inches: float | None
    thickness_inches: float | None

    @property
    def total_length_inches(self) -> float:
        return self.length_feet * 12 + self.length_inches


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_fractional_inches(text: str) -> float | None:
    """Parse "20 13/16" → 20.8125, "13/16" → 0.8125, "19.5" → 19.5.

    Returns None for empty input, a zero denominator, or non-numeric text.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return None

    m = _FRACTION_RE.match(trimmed)
    if m:
        whole = int(m.group(1)) if m.group(1) else 0
        num = int(m.group(2))
        den = int(m.group(3))
        if den == 0:
            return None
        return whole + num / den

    if _DECIMAL_RE.match(trimmed):
        return float(trimmed)
    return None


def _feet_inches(feet: str, inches: str | None) -> tuple[int, float]:
    inch_value = parse_fractional_inches(inches) if inches else None
    return int(feet), inch_value or 0.0


def _dash_is_board_size(feet: int, inches: int) -> bool:
    return (
        _DASH_FEET_RANGE[0] <= feet <= _DASH_FEET_RANGE[1]
        and _DASH_INCH_RANGE[0] <= inches <= _DASH_INCH_RANGE[1]
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_dimension_string(text: str) -> ParsedDimensions | None:
    """Parse "5'8 x 20 13/16 x 2 1/4" into length, width and thickness.

    Width and thickness are read as single figures, so trailing numbers
    ("2 3/8 2020") are left alone.  A prime followed by a letter ("70's")
    is not a length.  Returns None when no dimension notation is recognised.
    """
    if not text or not text.strip():
        return None
    value = text.strip()

    m = _FULL_RE.search(value)
    if m:
        feet, inches = _feet_inches(m.group(1), m.group(2))
        return ParsedDimensions(
            feet, inches,
            parse_fractional_inches(m.group(3)),
            parse_fractional_inches(m.group(4)),
        )

    m = _TWO_PART_RE.search(value)
    if m:
        feet, inches = _feet_inches(m.group(1), m.group(2))
        return ParsedDimensions(feet, inches, parse_fractional_inches(m.group(3)), None)

    for pattern in (_PRIME_RE, _FT_RE):
        m = pattern.search(value)
        if m:
            feet, inches = _feet_inches(m.group(1), m.group(2))
            return ParsedDimensions(feet, inches, None, None)

    for m in _DASH_RE.finditer(value):
        feet, inches = int(m.group(1)), int(m.group(2))
        if _dash_is_board_size(feet, inches):
            return ParsedDimensions(feet, float(inches), None, None)

    return None


def normalize_dimensions(text: str) -> NormalizedDimensions | None:
    """Resolve the board length in ``text`` to inches.

    ``text`` may be a whole product title or a bare dimension field.
    Never raises; returns None when no length can be found.
    """
    parsed = parse_dimension_string(text)
    if parsed is None:
        return None
    length = parsed.total_length_inches
    if length <= 0:
        return None
    return NormalizedDimensions(length_inches=float(length), original=text.strip())


def strip_dimensions(text: str) -> str:
    """Remove every dimension substring from ``text`` (not just the first)."""
    for pattern in DIMENSION_PATTERNS:
        text = pattern.sub(" ", text)

    def _dash(m: re.Match[str]) -> str:
        if _dash_is_board_size(int(m.group(1)), int(m.group(2))):
            return " "
        return m.group(0)

    return _DASH_RE.sub(_dash, text)


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------

_VOLUME_PREFIX_RE = re.compile(r"[Vv](\d+(?:\.\d+)?)")
_VOLUME_LABEL_RE = re.compile(r"[Vv](?:olume)?[:\s]+(\d+(?:\.\d+)?)")
_VOLUME_LITER_RE = re.compile(r"(\d+(?:\.\d+)?)\s*[Ll](?:iters?|itres?)?")
_VOLUME_PLAIN_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*$")


def parse_volume_string(text: str) -> float | None:
    """Parse "28.8", "28.8L", "V28.8" or "volume: 28.8" into litres."""
    if not text or not text.strip():
        return None
    value = text.strip()
    for pattern in (_VOLUME_PREFIX_RE, _VOLUME_LABEL_RE, _VOLUME_LITER_RE, _VOLUME_PLAIN_RE):
        m = pattern.search(value)
        if m:
            return float(m.group(1))
    return None
