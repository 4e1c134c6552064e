import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from adboard.config import settings
from adboard.database import get_db
from adboard.errors import envelope, storage_error_message
from adboard.schemas import (
    AdvertisementCreate,
    CreateResponse,
    GetAllRequest,
    GetAllResponse,
    GetOneRequest,
)
from adboard.services import advertisement_service
from adboard.services.advertisement_service import AdvertisementNotFound

logger = logging.getLogger(__name__)

router = APIRouter(tags=["advertisements"])

# asyncpg raises plain OSError subclasses when the server is unreachable.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


@router.post("/create", response_model=CreateResponse)
async def create_advertisement(data: AdvertisementCreate, db: AsyncSession = Depends(get_db)):
    try:
        adv_id = await advertisement_service.create_advertisement(db, data)
    except STORAGE_ERRORS as exc:
        logger.exception("Creating advertisement failed")
        return envelope(500, storage_error_message(exc))
    return CreateResponse(id=adv_id)


@router.post("/getone")
async def get_advertisement(data: GetOneRequest, db: AsyncSession = Depends(get_db)):
    try:
        return await advertisement_service.get_advertisement(db, data.id, data.fields)
    except AdvertisementNotFound as exc:
        return envelope(404 if settings.NOT_FOUND_AS_404 else 500, str(exc))
    except STORAGE_ERRORS as exc:
        logger.exception("Fetching advertisement id=%d failed", data.id)
        return envelope(500, storage_error_message(exc))


@router.post("/getall", response_model=GetAllResponse)
async def list_advertisements(data: GetAllRequest, db: AsyncSession = Depends(get_db)):
    try:
        items = await advertisement_service.list_advertisements(db, data.page, data.sort)
    except STORAGE_ERRORS as exc:
        logger.exception("Listing advertisements from page=%d failed", data.page)
        return envelope(500, storage_error_message(exc))
    return GetAllResponse(advertisements=items)
