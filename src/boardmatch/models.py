from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Surfboard(Base):
    __tablename__ = "surfboards"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, default="")
    shaper: Mapped[str | None] = mapped_column(Text, nullable=True)
    dimensions: Mapped[str | None] = mapped_column(Text, nullable=True)  # raw vendor text: 5'8 x 20 1/4 x 2 1/2
    volume: Mapped[str | None] = mapped_column(Text, nullable=True)      # raw vendor text: 28.8L
    source: Mapped[str] = mapped_column(Text, default="", index=True)    # hawaiian-south-shore / surfgarage
    source_name: Mapped[str] = mapped_column(Text, default="")
    source_url: Mapped[str] = mapped_column(Text, default="")
    stock_status: Mapped[str] = mapped_column(Text, default="unknown")  # in_stock / out_of_stock / unknown

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    related_links: Mapped[list["RelatedListing"]] = relationship(
        back_populates="surfboard",
        foreign_keys="RelatedListing.surfboard_id",
        cascade="all, delete-orphan",
    )


class RelatedListing(Base):
    """Directed edge; a link between two listings is stored in both directions."""

    __tablename__ = "related_listings"
    __table_args__ = (UniqueConstraint("surfboard_id", "related_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    surfboard_id: Mapped[str] = mapped_column(Text, ForeignKey("surfboards.id", ondelete="CASCADE"), index=True)
    related_id: Mapped[str] = mapped_column(Text, ForeignKey("surfboards.id", ondelete="CASCADE"))
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)  # None = linked by hand
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    surfboard: Mapped["Surfboard"] = relationship(
        back_populates="related_links", foreign_keys=[surfboard_id],
    )
