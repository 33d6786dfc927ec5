"""
Report model - a vehicle condition report submitted by a user.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Numeric, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_reports.db.base import Base

if TYPE_CHECKING:
    from vehicle_reports.db.models.user import User


class Report(Base):
    """Report entity. Vehicle facts, asking price, optional location and approval flag."""

    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(nullable=False, index=True)
    mileage: Mapped[int] = mapped_column(nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_approved: Mapped[bool] = mapped_column(default=False, server_default=false(), nullable=False)
    # No ON DELETE action: soft-deleting a user leaves its reports untouched
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User | None"] = relationship("User", back_populates="reports", lazy="raise")

    @property
    def car_identifier(self) -> str:
        return f"{self.year} {self.make} {self.model}"

    @property
    def location(self) -> str:
        if self.latitude is not None and self.longitude is not None:
            return f"{self.latitude}, {self.longitude}"
        return "Location not provided"

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, car={self.car_identifier})>"
