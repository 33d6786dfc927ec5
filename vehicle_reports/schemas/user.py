"""User request/response schemas - API contract and validation."""

from datetime import date, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, EmailStr, Field

from vehicle_reports.schemas.report import ReportResponse


class UserBase(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    date_of_birth: date | None = None


class UserCreate(UserBase):
    # Stored as given; hashing is the caller's contract
    password: str = Field(..., min_length=8, max_length=255)


class UserUpdate(BaseModel):
    """Partial update: only fields sent by the client are applied."""

    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=2, max_length=100)
    last_name: str | None = Field(None, min_length=2, max_length=100)
    password: str | None = Field(None, min_length=8, max_length=255)
    is_email_verified: bool | None = None
    phone_number: str | None = Field(None, max_length=50)
    date_of_birth: date | None = None

    NULLABLE: ClassVar[frozenset[str]] = frozenset({"phone_number", "date_of_birth"})

    def to_patch(self) -> dict[str, Any]:
        """Fields the client sent; explicit nulls are kept only for nullable columns."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k in self.NULLABLE}


class UserResponse(BaseModel):
    """User without password."""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    is_email_verified: bool
    phone_number: str | None = None
    date_of_birth: date | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserWithReportsResponse(UserResponse):
    reports: list[ReportResponse] = []


class UserReportCountResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    report_count: int

    model_config = {"from_attributes": True}
