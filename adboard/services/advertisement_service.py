"""
Advertisement service — the three persistence operations behind the API.

Design notes
------------
- Every operation owns exactly one transaction, opened with
  ``async with db.begin()``.  Leaving the block normally commits; any
  exception rolls the whole transaction back before it propagates, so a
  failed photo insert never leaves an orphan advertisement behind.
- Read operations use the same discipline even though they write nothing.
- The main photo of an advertisement is the one with the lowest
  ``position`` (ties broken by photo id).  Both the single fetch and the
  page listing use that rule, so the link shown in a listing is the same
  one ``/getone`` reports as ``mainlink``.
- Storage errors are not translated here; the router maps them to
  envelopes.  Only the missing-advertisement case gets its own exception.
"""
import logging

from sqlalchemy import exists, func, select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from adboard.config import settings
from adboard.models import Advertisement, Photo
from adboard.schemas import (
    AdvertisementCreate,
    AdvertisementDetail,
    AdvertisementListItem,
    AdvertisementSummary,
    SortOption,
)

logger = logging.getLogger(__name__)

_SORT_ORDER = {
    SortOption.PRICE_ASC: Advertisement.price.asc(),
    SortOption.PRICE_DESC: Advertisement.price.desc(),
    SortOption.DATE_ASC: Advertisement.created_at.asc(),
    SortOption.DATE_DESC: Advertisement.created_at.desc(),
}


class AdvertisementNotFound(LookupError):
    """Raised when the requested advertisement id has no row."""

    def __init__(self, adv_id: int) -> None:
        super().__init__("Advertisement with such ID does not exist")
        self.adv_id = adv_id


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

async def create_advertisement(db: AsyncSession, data: AdvertisementCreate) -> int:
    """
    Insert an advertisement and one photo row per link, atomically.

    Returns the generated advertisement id.
    """
    async with db.begin():
        advertisement = Advertisement(
            name=data.name,
            description=data.description,
            price=data.price,
        )
        db.add(advertisement)
        await db.flush()

        db.add_all(
            Photo(adv_id=advertisement.id, link=link, position=position)
            for position, link in enumerate(data.links)
        )
        await db.flush()

    logger.info(
        "Created advertisement id=%d with %d photo(s)", advertisement.id, len(data.links)
    )
    return advertisement.id


# ---------------------------------------------------------------------------
# Fetch one
# ---------------------------------------------------------------------------

async def get_advertisement(
    db: AsyncSession, adv_id: int, with_details: bool = False
) -> AdvertisementSummary | AdvertisementDetail:
    """
    Return the advertisement *adv_id*.

    Without details only the name, price and main link are loaded; with
    details the description and every link (in creation order) are added.
    Raises ``AdvertisementNotFound`` when the id does not exist.
    """
    async with db.begin():
        found = await db.scalar(select(exists().where(Advertisement.id == adv_id)))
        if not found:
            logger.info("Advertisement id=%d not found", adv_id)
            raise AdvertisementNotFound(adv_id)

        if not with_details:
            q = (
                select(Advertisement.name, Photo.link, Advertisement.price)
                .join(Photo, Photo.adv_id == Advertisement.id)
                .where(Advertisement.id == adv_id)
                .order_by(Photo.position, Photo.id)
                .limit(1)
            )
            row = (await db.execute(q)).one()
            return AdvertisementSummary(name=row.name, price=row.price, mainlink=row.link)

        q = (
            select(
                Advertisement.name,
                Photo.link,
                Advertisement.price,
                Advertisement.description,
            )
            .join(Photo, Photo.adv_id == Advertisement.id)
            .where(Advertisement.id == adv_id)
            .order_by(Photo.position, Photo.id)
        )
        rows = (await db.execute(q)).all()
        if not rows:
            raise NoResultFound(f"Advertisement {adv_id} has no photos")

        links = [row.link for row in rows]
        first = rows[0]
        return AdvertisementDetail(
            name=first.name,
            price=first.price,
            mainlink=links[0],
            description=first.description,
            alllinks=links,
        )


# ---------------------------------------------------------------------------
# Fetch page
# ---------------------------------------------------------------------------

async def list_advertisements(
    db: AsyncSession, page: int, sort: SortOption
) -> list[AdvertisementListItem]:
    """
    Return one entry per advertisement whose id lies in
    ``[page, page + PAGE_WINDOW - 1]``, ordered by *sort*.

    Each entry carries the advertisement's main photo link.  Ties on the
    sort key are broken by ascending id.
    """
    last_id = page + settings.PAGE_WINDOW - 1

    # Rank photos per advertisement so exactly one row survives per id.
    ranked = (
        select(
            Photo.adv_id,
            Photo.link,
            func.row_number()
            .over(partition_by=Photo.adv_id, order_by=(Photo.position, Photo.id))
            .label("photo_rank"),
        )
        .where(Photo.adv_id.between(page, last_id))
        .subquery()
    )

    q = (
        select(Advertisement.name, ranked.c.link, Advertisement.price)
        .join(ranked, ranked.c.adv_id == Advertisement.id)
        .where(ranked.c.photo_rank == 1, Advertisement.id.between(page, last_id))
        .order_by(_SORT_ORDER[sort], Advertisement.id.asc())
    )

    async with db.begin():
        rows = (await db.execute(q)).all()

    return [
        AdvertisementListItem(name=row.name, link=row.link, price=row.price)
        for row in rows
    ]
