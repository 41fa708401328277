"""Duplicate detection run: scan the catalog, log each match, auto-link confident ones."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from .catalog.base import BaseCatalogReader, BaseLinkWriter
from .matcher import (
    DEFAULT_MATCHER_CONFIG,
    DuplicateMatch,
    MatcherConfig,
    find_duplicates,
    log_match_details,
)

logger = logging.getLogger(__name__)


@dataclass
class DetectionSummary:
    total_products: int = 0
    matches_found: int = 0
    links_created: int = 0
    links_failed: int = 0
    matches_below_auto_link_threshold: int = 0
    by_source: dict[str, int] = field(default_factory=dict)
    matches: list[DuplicateMatch] = field(default_factory=list)

    @property
    def link_success_rate(self) -> float | None:
        attempted = self.links_created + self.links_failed
        if not attempted:
            return None
        return self.links_created / attempted


def run_duplicate_detection(
    reader: BaseCatalogReader,
    writer: BaseLinkWriter,
    config: MatcherConfig = DEFAULT_MATCHER_CONFIG,
    threshold: float | None = None,
    cross_source_only: bool = True,
    dry_run: bool = False,
) -> DetectionSummary:
    """Run one duplicate pass over the catalog.

    ``threshold`` is the minimum score reported as a match and defaults to
    ``config.min_confidence_to_auto_link``.  Matches at or above the auto-link
    confidence are linked through ``writer`` (unless ``dry_run``); the rest
    are only counted for manual review.
    """
    products = reader.fetch_products()
    summary = DetectionSummary(total_products=len(products))
    summary.by_source = dict(Counter(p.source or "unknown" for p in products))

    logger.info(
        "Duplicate detection: %d products %s (tolerance=%sin, model>=%.2f, auto-link>=%.2f, brand required=%s)",
        len(products), summary.by_source,
        config.length_tolerance_inches, config.model_similarity_threshold,
        config.min_confidence_to_auto_link, config.require_brand_match,
    )

    report_threshold = config.min_confidence_to_auto_link if threshold is None else threshold
    matches = find_duplicates(
        products,
        threshold=report_threshold,
        cross_source_only=cross_source_only,
        config=config,
    )
    summary.matches = matches
    summary.matches_found = len(matches)

    if not matches:
        logger.info("No duplicate matches found")
        return summary

    names = {p.id: p.name for p in products}
    for match in matches:
        log_match_details(
            match,
            names.get(match.product_id, "Unknown"),
            names.get(match.matched_product_id, "Unknown"),
        )

        if match.similarity < config.min_confidence_to_auto_link:
            logger.info(
                "Skipping auto-link %s <-> %s (%.1f%% < %.0f%%)",
                match.product_id, match.matched_product_id,
                match.similarity * 100, config.min_confidence_to_auto_link * 100,
            )
            summary.matches_below_auto_link_threshold += 1
            continue

        if dry_run:
            continue

        if writer.link(match.product_id, match.matched_product_id, confidence=match.similarity):
            summary.links_created += 1
        else:
            logger.warning("Failed to link %s <-> %s", match.product_id, match.matched_product_id)
            summary.links_failed += 1

    logger.info(
        "Duplicate detection done: %d matches, %d linked, %d failed, %d below auto-link",
        summary.matches_found, summary.links_created,
        summary.links_failed, summary.matches_below_auto_link_threshold,
    )
    return summary


def format_summary(summary: DetectionSummary) -> str:
    lines = [
        f"Total products analyzed:     {summary.total_products}",
        f"Duplicate matches found:     {summary.matches_found}",
        f"Links created:               {summary.links_created}",
        f"Links failed:                {summary.links_failed}",
        f"Below auto-link threshold:   {summary.matches_below_auto_link_threshold}",
    ]
    rate = summary.link_success_rate
    if rate is not None:
        lines.append(f"Link success rate:           {rate * 100:.1f}%")
    return "\n".join(lines)
