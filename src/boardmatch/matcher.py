"""Cross-vendor duplicate detection: decides whether two surfboard listings are the same board.

Handles:
- Brand abbreviations (CI = Channel Islands, JS = JS Industries)
- Brand anywhere in the title ("Used Firewire Seaside", "Seaside by Firewire")
- Dimension notation differences (5'8 x 20 1/4 x 2 1/2 vs 5'8" vs 5-8)
- Color / finish noise (White, Clear, Resin Tint)
- Fin system noise (FCS II, Futures, Thruster)
- Construction / tech names (Helium, FutureFlex, Carbon)
- Filler words (Surfboard, Used, Pre-Owned, 27.5L, model years)

Each listing is reduced to a signature (brand, model, length) and signatures
are compared in gates:

  Brand gate    → both brands known and different = score 0
  Model gate    → model similarity below threshold = similarity * 0.5
  Length gate   → length outside tolerance = similarity - min(diff / 6, 0.5)
  Full match    → 0.60 * model similarity
                  + 0.20 brand confirmed (0.10 when a brand is unknown)
                  + 0.20 length confirmed (0.10 when a length is unknown)

Threshold: score >= 0.85 → reported as a duplicate
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from rapidfuzz.distance import Levenshtein

from .dimensions import normalize_dimensions, strip_dimensions

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Known brands, most specific first.  A short abbreviation must never
# shadow a longer name that also appears in the title.
# ---------------------------------------------------------------------------

_KNOWN_BRANDS: tuple[str, ...] = (
    "channel islands",
    "hawaiian pro designs",
    "chris christenson",
    "donald takayama",
    "js industries",
    "haydenshapes",
    "sharp eye",
    "catch surf",
    "firewire",
    "pyzel",
    "album",
    "torq",
    "rusty",
    "lost",
    "bing",
    "dhd",
    # Abbreviations
    "ci",
    "js",
    "hpd",
)

# Abbreviation → canonical brand.  Brands not listed are their own canonical form.
_BRAND_ALIASES: dict[str, str] = {
    "ci": "channel islands",
    "js": "js industries",
    "hpd": "hawaiian pro designs",
}


def _word_re(phrase: str) -> re.Pattern[str]:
    """Case-insensitive whole-word pattern ("lost" must not hit "LostWhale")."""
    return re.compile(r"(?<![a-z0-9])" + re.escape(phrase) + r"(?![a-z0-9])", re.IGNORECASE)


_BRAND_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (brand, _word_re(brand)) for brand in _KNOWN_BRANDS
)

# ---------------------------------------------------------------------------
# Noise vocabularies stripped from a title before it is treated as a model
# name.  All matched on the lowercased title at word boundaries.
# ---------------------------------------------------------------------------

_COLOR_WORDS = frozenset({
    "white", "black", "blue", "red", "green", "yellow", "orange", "pink",
    "purple", "grey", "gray", "teal", "aqua", "navy", "brown", "silver",
    "cream", "charcoal", "turquoise", "clear", "tint", "resin tint",
    "two tone", "fade", "swirl", "pigment", "gloss", "polish", "sanded",
})

# Multi-word entries are removed before their prefixes ("fcs ii" before "fcs")
_FIN_WORDS = frozenset({
    "fcs ii", "fcs 2", "fcsii", "fcs2", "fcs", "futures", "future fins",
    "thruster", "quad", "tri quad", "tri-quad", "5 fin", "five fin", "2+1",
})

_TECH_WORDS = frozenset({
    "helium", "futureflex", "ff", "lft", "volcanic", "ibolic", "thunderbolt",
    "carbon", "bamboo", "epoxy", "eps", "pu", "xtr", "spine-tek", "c-tech",
    "tuflite", "hydroflex", "varial", "carbon wrap", "dark arts", "e-tech",
    "stringerless", "softop", "soft top",
})

_FILLER_WORDS = frozenset({
    "by", "x", "v", "vol", "volume", "liters", "litres", "l",
    "new", "pre-owned", "used",
    "surfboard", "surfboards", "board", "boards",
})

# 27.5L, 30 liters
_VOLUME_RE = re.compile(r"(?<![a-z0-9.])\d+(?:\.\d+)?\s*(?:l|liters?|litres?)(?![a-z0-9])")
# 2020, 1998
_YEAR_RE = re.compile(r"(?<![a-z0-9])(?:19|20)\d{2}(?![a-z0-9])")
_PUNCT_RE = re.compile(r"[^\w\s]|_")


def _vocab_patterns(*vocabularies: frozenset[str]) -> tuple[re.Pattern[str], ...]:
    """Compile vocabularies longest-first so multi-word tokens go before their prefixes."""
    words = set().union(*vocabularies)
    ordered = sorted(words, key=lambda w: (-len(w.split()), -len(w), w))
    return tuple(_word_re(w) for w in ordered)


_COLOR_PATTERNS = _vocab_patterns(_COLOR_WORDS)
_FIN_PATTERNS = _vocab_patterns(_FIN_WORDS)
_TECH_PATTERNS = _vocab_patterns(_TECH_WORDS)
_FILLER_PATTERNS = _vocab_patterns(_FILLER_WORDS)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProductSignature:
    """Structured view of a listing title."""

    brand: str | None       # canonical lowercase brand, None if unrecognised
    model: str              # lowercase residual model name, may be empty
    length_inches: float | None
    source: str             # vendor id, only used for cross-source filtering


def extract_brand(title: str) -> str | None:
    """Return the canonical brand found in ``title``, or None."""
    if not title or not title.strip():
        return None
    for brand, pattern in _BRAND_PATTERNS:
        if pattern.search(title):
            return _BRAND_ALIASES.get(brand, brand)
    return None


def _strip_patterns(text: str, patterns: Iterable[re.Pattern[str]]) -> str:
    for pattern in patterns:
        text = pattern.sub(" ", text)
    return text


def extract_model(title: str, brand: str | None = None) -> str:
    """Reduce ``title`` to its model name.

    Order matters: brands, then dimensions (on the original casing), then
    lowercase noise vocabularies, then punctuation.
    """
    if not title or not title.strip():
        return ""

    text = title
    if brand:
        text = _word_re(brand).sub(" ", text)
    text = _strip_patterns(text, (p for _, p in _BRAND_PATTERNS))

    text = strip_dimensions(text)
    text = text.lower()

    text = _VOLUME_RE.sub(" ", text)
    text = _YEAR_RE.sub(" ", text)
    text = _strip_patterns(text, _COLOR_PATTERNS)
    text = _strip_patterns(text, _FIN_PATTERNS)
    text = _strip_patterns(text, _TECH_PATTERNS)
    text = _strip_patterns(text, _FILLER_PATTERNS)

    text = _PUNCT_RE.sub(" ", text)
    return re.sub(r"\s+", " ", text).strip()


def extract_product_signature(title: str, source: str) -> ProductSignature:
    """Build the (brand, model, length) signature of a listing title."""
    brand = extract_brand(title)
    dims = normalize_dimensions(title)
    return ProductSignature(
        brand=brand,
        model=extract_model(title, brand),
        length_inches=dims.length_inches if dims else None,
        source=source,
    )


# ---------------------------------------------------------------------------
# String similarity
# ---------------------------------------------------------------------------


def calculate_similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in [0, 1]."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return Levenshtein.normalized_similarity(a, b)


def normalize_name(name: str) -> str:
    """Lowercase, replace non-alphanumerics with spaces, collapse whitespace."""
    text = re.sub(r"[^a-z0-9\s]", " ", (name or "").lower())
    return re.sub(r"\s+", " ", text).strip()


def create_comparison_key(shaper: str | None, name: str) -> str:
    """Whole-name comparison key: shaper + name unless the name already has the shaper."""
    norm_shaper = normalize_name(shaper) if shaper else ""
    norm_name = normalize_name(name)
    if norm_shaper and norm_shaper in norm_name:
        return norm_name
    return f"{norm_shaper} {norm_name}" if norm_shaper else norm_name


# ---------------------------------------------------------------------------
# Signature comparison
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MatcherConfig:
    """Matching policy.  Pass a new instance per call instead of mutating one."""

    length_tolerance_inches: float = 1.0
    require_brand_match: bool = False
    model_similarity_threshold: float = 0.8
    # Interpreted by callers deciding whether to persist a link
    min_confidence_to_auto_link: float = 0.7


DEFAULT_MATCHER_CONFIG = MatcherConfig()

DUPLICATE_THRESHOLD = 0.85

_MODEL_WEIGHT = 0.60
_BRAND_CONFIRMED_BONUS = 0.20
_BRAND_UNKNOWN_BONUS = 0.10
_LENGTH_CONFIRMED_BONUS = 0.20
_LENGTH_UNKNOWN_BONUS = 0.10
_MODEL_MISS_FACTOR = 0.5
_LENGTH_PENALTY_PER_INCH = 1 / 6
_LENGTH_PENALTY_CAP = 0.5


@dataclass(frozen=True)
class SignatureComparison:
    """Result of comparing two signatures."""

    score: float                    # 0.0 – 1.0
    brand_match: bool               # brands agree, or brand not required and unknown
    model_similarity: float         # 0.0 – 1.0
    length_difference_inches: float | None  # None when either length is unknown


def compare_signatures(
    sig1: ProductSignature,
    sig2: ProductSignature,
    config: MatcherConfig = DEFAULT_MATCHER_CONFIG,
) -> SignatureComparison:
    """Score two signatures through the brand, model and length gates."""
    both_brands = sig1.brand is not None and sig2.brand is not None
    if both_brands:
        brand_match = sig1.brand == sig2.brand
    else:
        brand_match = not config.require_brand_match

    model_similarity = calculate_similarity(sig1.model, sig2.model)

    length_diff: float | None = None
    if sig1.length_inches is not None and sig2.length_inches is not None:
        length_diff = abs(sig1.length_inches - sig2.length_inches)

    # --- Brand gate: cross-brand pairs never link ---
    if not brand_match:
        return SignatureComparison(0.0, False, model_similarity, length_diff)

    # --- Model gate: keep a suppressed score for manual review ---
    if model_similarity < config.model_similarity_threshold:
        return SignatureComparison(
            model_similarity * _MODEL_MISS_FACTOR, brand_match, model_similarity, length_diff,
        )

    # --- Length gate: linear penalty, capped at half the model score ---
    if length_diff is not None and length_diff > config.length_tolerance_inches:
        penalty = min(length_diff * _LENGTH_PENALTY_PER_INCH, _LENGTH_PENALTY_CAP)
        return SignatureComparison(
            max(0.0, model_similarity - penalty), brand_match, model_similarity, length_diff,
        )

    # --- Full match ---
    score = _MODEL_WEIGHT * model_similarity
    score += _BRAND_CONFIRMED_BONUS if both_brands else _BRAND_UNKNOWN_BONUS
    score += _LENGTH_CONFIRMED_BONUS if length_diff is not None else _LENGTH_UNKNOWN_BONUS

    return SignatureComparison(min(1.0, score), brand_match, model_similarity, length_diff)


# ---------------------------------------------------------------------------
# Duplicate finder
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DuplicateMatch:
    """A pair of listings that look like the same board, with the facets behind the score."""

    product_id: str
    matched_product_id: str
    similarity: float
    brand_match: bool
    model_similarity: float
    length_difference_inches: float | None
    brand1: str | None
    brand2: str | None
    model1: str
    model2: str
    length1: float | None
    length2: float | None


def find_duplicates(
    products,
    threshold: float = DUPLICATE_THRESHOLD,
    cross_source_only: bool = True,
    config: MatcherConfig = DEFAULT_MATCHER_CONFIG,
) -> list[DuplicateMatch]:
    """Compare every unordered pair of ``products`` and keep those scoring >= ``threshold``.

    ``products`` are records exposing ``id``, ``name`` and ``source``.
    Pairs are visited i < j in input order, so each match is reported once.
    A product may appear in several matches; transitive grouping is left
    to the caller.
    """
    entries = [
        (p.id, p.source, extract_product_signature(p.name or "", p.source or ""))
        for p in products
    ]

    matches: list[DuplicateMatch] = []
    for i in range(len(entries)):
        id_a, source_a, sig_a = entries[i]
        for j in range(i + 1, len(entries)):
            id_b, source_b, sig_b = entries[j]
            if cross_source_only and source_a == source_b:
                continue

            result = compare_signatures(sig_a, sig_b, config)
            if result.score < threshold:
                continue

            matches.append(DuplicateMatch(
                product_id=id_a,
                matched_product_id=id_b,
                similarity=result.score,
                brand_match=result.brand_match,
                model_similarity=result.model_similarity,
                length_difference_inches=result.length_difference_inches,
                brand1=sig_a.brand,
                brand2=sig_b.brand,
                model1=sig_a.model,
                model2=sig_b.model,
                length1=sig_a.length_inches,
                length2=sig_b.length_inches,
            ))

    logger.debug(
        "Duplicate scan: %d products, %d matches (threshold=%.2f, cross_source_only=%s)",
        len(entries), len(matches), threshold, cross_source_only,
    )
    return matches


def _fmt_length(value: float | None) -> str:
    if value is None:
        return "?"
    feet, inches = divmod(value, 12)
    return f"{int(feet)}'{inches:g}\" ({value:g} in)"


def format_match_details(match: DuplicateMatch, name1: str, name2: str) -> str:
    """Human-readable breakdown of a match for review logs."""
    lines = [f"[duplicate] {match.similarity * 100:.1f}% confidence"]
    lines.append(f"  1: {name1} ({match.product_id})")
    lines.append(f"  2: {name2} ({match.matched_product_id})")
    lines.append(
        f"  Brand: {match.brand1 or '?'} / {match.brand2 or '?'}"
        f" ({'match' if match.brand_match else 'mismatch'})"
    )
    lines.append(
        f"  Model: {match.model1 or '?'} / {match.model2 or '?'}"
        f" ({match.model_similarity * 100:.0f}% similar)"
    )
    diff = match.length_difference_inches
    lines.append(
        f"  Length: {_fmt_length(match.length1)} / {_fmt_length(match.length2)}"
        + (f" (diff {diff:g} in)" if diff is not None else "")
    )
    return "\n".join(lines)


def log_match_details(match: DuplicateMatch, name1: str, name2: str) -> None:
    logger.info("%s", format_match_details(match, name1, name2))
