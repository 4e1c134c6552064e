from __future__ import annotations

from datetime import date
from typing import List

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from adboard.database import Base

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
_BigId = BigInteger().with_variant(Integer, "sqlite")


# ---------------------------------------------------------------------------
# Advertisement
# ---------------------------------------------------------------------------
class Advertisement(Base):
    __tablename__ = "advertisement"

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_advertisement_name_not_empty"),
        CheckConstraint("description <> ''", name="ck_advertisement_description_not_empty"),
        CheckConstraint("price > 0", name="ck_advertisement_price_positive"),
        Index("adv_id_idx", "id"),
        # Listing sorted by price / by date
        Index("adv_price_idx", "price"),
        Index("adv_date_idx", "created_at"),
    )

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(16, 2, asdecimal=False), nullable=False)
    created_at: Mapped[date] = mapped_column(
        Date, server_default=func.current_date(), nullable=False
    )

    # lazy="noload": services select the columns they need explicitly
    photos: Mapped[List["Photo"]] = relationship(
        "Photo", back_populates="advertisement", passive_deletes=True, lazy="noload"
    )


# ---------------------------------------------------------------------------
# Photo
# ---------------------------------------------------------------------------
class Photo(Base):
    __tablename__ = "photos"

    __table_args__ = (
        CheckConstraint("link <> ''", name="ck_photos_link_not_empty"),
        Index("photos_adv_id_idx", "adv_id"),
    )

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    adv_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("advertisement.id", ondelete="CASCADE"), nullable=False
    )
    link: Mapped[str] = mapped_column(Text, nullable=False)
    # Index of the link in the creation request; position 0 is the main photo.
    position: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)

    advertisement: Mapped["Advertisement"] = relationship(
        "Advertisement", back_populates="photos", lazy="noload"
    )
