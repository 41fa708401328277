"""Health check endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import RelatedListing, Surfboard
from ..schemas import HealthResponse, ServiceStatus

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check(db: Session = Depends(get_db)):
    services: list[ServiceStatus] = []
    overall = "ok"

    try:
        products = db.query(Surfboard).count()
        # Each link is stored once per direction
        links = db.query(RelatedListing).count() // 2
        services.append(ServiceStatus(name="database", status="ok"))
    except SQLAlchemyError as e:
        logger.warning("Health check: DB error: %s", e)
        products = links = 0
        services.append(ServiceStatus(name="database", status="degraded", detail=str(e)))
        overall = "degraded"

    return HealthResponse(
        status=overall,
        product_count=products,
        link_count=links,
        services=services,
    )
