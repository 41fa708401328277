"""Duplicate review queue, detection trigger, and manual link/unlink."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..catalog.sql import SqlCatalog
from ..config import settings
from ..database import get_db
from ..detection import run_duplicate_detection
from ..matcher import DuplicateMatch, find_duplicates
from ..models import Surfboard
from ..schemas import (
    DetectionSummaryResponse,
    DuplicateMatchResponse,
    LinkedProduct,
    LinkRequest,
    LinkResponse,
    RelatedListingsResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/duplicates", tags=["duplicates"])


def _match_to_response(match: DuplicateMatch, auto_link_at: float) -> DuplicateMatchResponse:
    return DuplicateMatchResponse(
        product_id=match.product_id,
        matched_product_id=match.matched_product_id,
        similarity=match.similarity,
        brand_match=match.brand_match,
        model_similarity=match.model_similarity,
        length_difference_inches=match.length_difference_inches,
        brand1=match.brand1,
        brand2=match.brand2,
        model1=match.model1,
        model2=match.model2,
        length1=match.length1,
        length2=match.length2,
        auto_link=match.similarity >= auto_link_at,
    )


def _load_pair(body: LinkRequest, catalog: SqlCatalog) -> tuple[Surfboard, Surfboard]:
    id1 = body.product_id_1.strip()
    id2 = body.product_id_2.strip()
    if not id1 or not id2:
        raise HTTPException(400, "Both product_id_1 and product_id_2 are required")
    if id1 == id2:
        raise HTTPException(400, "Cannot link a product to itself")

    p1 = catalog.get(id1)
    p2 = catalog.get(id2)
    if p1 is None or p2 is None:
        raise HTTPException(404, "One or both products not found")
    return p1, p2


# ---------------------------------------------------------------------------
# Review queue
# ---------------------------------------------------------------------------

@router.get("", response_model=list[DuplicateMatchResponse])
def list_duplicates(
    threshold: float | None = Query(None, ge=0.0, le=1.0),
    cross_source_only: bool | None = Query(None),
    db: Session = Depends(get_db),
):
    if threshold is None:
        threshold = settings.duplicate_threshold
    if cross_source_only is None:
        cross_source_only = settings.duplicate_cross_source_only

    config = settings.matcher_config
    products = SqlCatalog(db).fetch_products()
    matches = find_duplicates(
        products,
        threshold=threshold,
        cross_source_only=cross_source_only,
        config=config,
    )
    matches.sort(key=lambda m: m.similarity, reverse=True)
    return [_match_to_response(m, config.min_confidence_to_auto_link) for m in matches]


@router.post("/detect", response_model=DetectionSummaryResponse)
def detect_duplicates(
    dry_run: bool = Query(False),
    db: Session = Depends(get_db),
):
    catalog = SqlCatalog(db)
    config = settings.matcher_config
    summary = run_duplicate_detection(
        catalog,
        catalog,
        config=config,
        cross_source_only=settings.duplicate_cross_source_only,
        dry_run=dry_run,
    )
    return DetectionSummaryResponse(
        total_products=summary.total_products,
        matches_found=summary.matches_found,
        links_created=summary.links_created,
        links_failed=summary.links_failed,
        matches_below_auto_link_threshold=summary.matches_below_auto_link_threshold,
        by_source=summary.by_source,
        dry_run=dry_run,
        matches=[_match_to_response(m, config.min_confidence_to_auto_link) for m in summary.matches],
    )


# ---------------------------------------------------------------------------
# Manual linking
# ---------------------------------------------------------------------------

@router.post("/link", response_model=LinkResponse)
def link_products(body: LinkRequest, db: Session = Depends(get_db)):
    catalog = SqlCatalog(db)
    p1, p2 = _load_pair(body, catalog)

    if p1.source == p2.source:
        raise HTTPException(400, "Cannot link products from the same source")

    if not catalog.link(p1.id, p2.id):
        raise HTTPException(500, "Failed to link products")

    logger.info("Manually linked %s <-> %s", p1.id, p2.id)
    return LinkResponse(
        success=True,
        message="Products linked successfully",
        linked_products=[
            LinkedProduct(id=p1.id, name=p1.name),
            LinkedProduct(id=p2.id, name=p2.name),
        ],
    )


@router.post("/unlink", response_model=LinkResponse)
def unlink_products(body: LinkRequest, db: Session = Depends(get_db)):
    catalog = SqlCatalog(db)
    p1, p2 = _load_pair(body, catalog)

    if not catalog.unlink(p1.id, p2.id):
        raise HTTPException(500, "Failed to unlink products")

    logger.info("Manually unlinked %s <-> %s", p1.id, p2.id)
    return LinkResponse(success=True, message="Products unlinked successfully")


@router.get("/{product_id}/related", response_model=RelatedListingsResponse)
def related_listings(product_id: str, db: Session = Depends(get_db)):
    catalog = SqlCatalog(db)
    if catalog.get(product_id) is None:
        raise HTTPException(404, "Product not found")

    related = []
    for related_id in catalog.related_ids(product_id):
        board = catalog.get(related_id)
        if board is not None:
            related.append(LinkedProduct(id=board.id, name=board.name))
    return RelatedListingsResponse(product_id=product_id, related=related)
