"""SQLAlchemy-backed catalog: reads listings and stores related-listing links."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import RelatedListing, Surfboard
from .base import BaseCatalogReader, BaseLinkWriter, CatalogProduct

logger = logging.getLogger(__name__)


class SqlCatalog(BaseCatalogReader, BaseLinkWriter):
    def __init__(self, db: Session) -> None:
        self._db = db

    def fetch_products(self) -> list[CatalogProduct]:
        rows = (
            self._db.query(Surfboard)
            .filter(Surfboard.stock_status != "out_of_stock")
            .order_by(Surfboard.source, Surfboard.id)
            .all()
        )
        return [
            CatalogProduct(
                id=row.id,
                name=row.name,
                source=row.source,
                shaper=row.shaper,
                dimensions=row.dimensions,
            )
            for row in rows
        ]

    def get(self, product_id: str) -> Surfboard | None:
        return self._db.get(Surfboard, product_id)

    def link(self, product_id: str, matched_product_id: str, confidence: float | None = None) -> bool:
        try:
            if self.get(product_id) is None or self.get(matched_product_id) is None:
                logger.error(
                    "link: could not find one or both products (%s, %s)",
                    product_id, matched_product_id,
                )
                return False

            existing = {
                (r.surfboard_id, r.related_id)
                for r in self._db.query(RelatedListing).filter(
                    RelatedListing.surfboard_id.in_([product_id, matched_product_id])
                )
            }
            for a, b in ((product_id, matched_product_id), (matched_product_id, product_id)):
                if (a, b) not in existing:
                    self._db.add(RelatedListing(surfboard_id=a, related_id=b, confidence=confidence))
            self._db.commit()
            return True
        except SQLAlchemyError:
            self._db.rollback()
            logger.exception("Failed to link %s <-> %s", product_id, matched_product_id)
            return False

    def unlink(self, product_id: str, matched_product_id: str) -> bool:
        try:
            removed = 0
            for a, b in ((product_id, matched_product_id), (matched_product_id, product_id)):
                removed += (
                    self._db.query(RelatedListing)
                    .filter(RelatedListing.surfboard_id == a, RelatedListing.related_id == b)
                    .delete(synchronize_session="fetch")
                )
            self._db.commit()
            logger.info("Unlinked %s <-> %s (%d rows)", product_id, matched_product_id, removed)
            return True
        except SQLAlchemyError:
            self._db.rollback()
            logger.exception("Failed to unlink %s <-> %s", product_id, matched_product_id)
            return False

    def related_ids(self, product_id: str) -> list[str]:
        rows = (
            self._db.query(RelatedListing.related_id)
            .filter(RelatedListing.surfboard_id == product_id)
            .order_by(RelatedListing.related_id)
            .all()
        )
        return [r[0] for r in rows]
