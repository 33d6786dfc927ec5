"""
User model - account holder that owns vehicle reports.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Index, String, false, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_reports.db.base import Base

if TYPE_CHECKING:
    from vehicle_reports.db.models.report import Report


class User(Base):
    """User entity. Identity, profile fields and soft-delete timestamp."""

    __tablename__ = "users"
    __table_args__ = (
        # Email is unique among active users only, so it can be reused after a soft delete
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Stored as given; hashing belongs to whoever calls the service
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_email_verified: Mapped[bool] = mapped_column(default=False, server_default=false(), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Loaded only on request (selectinload in the repository); implicit access raises
    reports: Mapped[list["Report"]] = relationship("Report", back_populates="user", lazy="raise")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
