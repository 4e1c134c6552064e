from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adboard.config import settings

Link = Annotated[str, Field(min_length=1)]

# Request bodies accept only the JSON types they declare: "1" is not an id
# and true is not a price.
_STRICT = ConfigDict(strict=True)


# --- Envelope ---

class StatusEnvelope(BaseModel):
    """Body of every non-success response."""
    status_code: str
    status_message: str


# --- Create ---

class AdvertisementCreate(BaseModel):
    model_config = _STRICT

    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    links: list[Link] = Field(min_length=1, max_length=settings.MAX_LINKS)
    # NUMERIC(16, 2) holds at most 14 integer digits.
    price: float = Field(gt=0, lt=10**14)

    @field_validator("price")
    @classmethod
    def at_most_two_decimals(cls, value: float) -> float:
        if Decimal(str(value)).as_tuple().exponent < -2:
            raise ValueError("price has more than 2 decimal places")
        return value


class CreateResponse(BaseModel):
    id: int


# --- Get one ---

class GetOneRequest(BaseModel):
    model_config = _STRICT

    id: int = Field(gt=0)
    fields: bool = False


class AdvertisementSummary(BaseModel):
    name: str
    price: float
    mainlink: str


class AdvertisementDetail(AdvertisementSummary):
    description: str
    alllinks: list[str]


# --- Get all ---

class SortOption(str, Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"


class GetAllRequest(BaseModel):
    # Field-level strictness: the sort key arrives as a plain string and is
    # matched against the enum values.
    page: int = Field(gt=0, strict=True)
    sort: SortOption


class AdvertisementListItem(BaseModel):
    name: str
    link: str
    price: float


class GetAllResponse(BaseModel):
    advertisements: list[AdvertisementListItem] = []
