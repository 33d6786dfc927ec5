"""Report request/response schemas - REST API contract."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator


def _max_model_year() -> int:
    return date.today().year + 1


class ReportBase(BaseModel):
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900)
    mileage: int = Field(..., ge=0)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    longitude: float | None = Field(None, ge=-180, le=180)
    latitude: float | None = Field(None, ge=-90, le=90)
    description: str | None = Field(None, max_length=255)

    @field_validator("year")
    @classmethod
    def year_not_in_future(cls, value: int) -> int:
        if value > _max_model_year():
            raise ValueError(f"year must be at most {_max_model_year()}")
        return value


class ReportCreate(ReportBase):
    pass


class ReportUpdate(BaseModel):
    """Partial update: only fields sent by the client are applied."""

    make: str | None = Field(None, min_length=1, max_length=100)
    model: str | None = Field(None, min_length=1, max_length=100)
    year: int | None = Field(None, ge=1900)
    mileage: int | None = Field(None, ge=0)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    longitude: float | None = Field(None, ge=-180, le=180)
    latitude: float | None = Field(None, ge=-90, le=90)
    description: str | None = Field(None, max_length=255)
    is_approved: bool | None = None

    NULLABLE: ClassVar[frozenset[str]] = frozenset({"longitude", "latitude", "description"})

    @field_validator("year")
    @classmethod
    def year_not_in_future(cls, value: int | None) -> int | None:
        if value is not None and value > _max_model_year():
            raise ValueError(f"year must be at most {_max_model_year()}")
        return value

    def to_patch(self) -> dict[str, Any]:
        """Fields the client sent; explicit nulls are kept only for nullable columns."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k in self.NULLABLE}


class ReportOwner(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str

    model_config = {"from_attributes": True}


class ReportResponse(ReportBase):
    id: str
    user_id: str
    is_approved: bool
    car_identifier: str
    location: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReportWithOwnerResponse(ReportResponse):
    user: ReportOwner | None = None  # None when the owner has been soft-deleted


class AveragePriceResponse(BaseModel):
    make: str
    model: str
    year: int | None = None
    average_price: float
