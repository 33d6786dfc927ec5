"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place for optimization and reuse.
"""

from dataclasses import dataclass

from sqlalchemy import and_, func, select
from sqlalchemy.orm import selectinload

from vehicle_reports.db.base import active
from vehicle_reports.db.models.report import Report
from vehicle_reports.db.models.user import User
from vehicle_reports.db.repositories.base_repository import BaseRepository


@dataclass(frozen=True)
class UserReportCount:
    """One row of the reports-per-user aggregate."""

    id: str
    email: str
    first_name: str
    last_name: str
    report_count: int


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with domain logic."""

    def __init__(self, session):
        super().__init__(session, User)

    def _relation_options(self):
        # Soft-deleted reports stay hidden inside the relation too
        return [selectinload(User.reports.and_(active(Report)))]

    async def find_by_email(self, email: str) -> User | None:
        """Exact, case-sensitive lookup among active users. Relation not loaded."""
        result = await self.session.execute(self._select_active().where(User.email == email))
        return result.scalar_one_or_none()

    async def find_users_with_reports_count(self) -> list[UserReportCount]:
        """Active users with the number of their active reports, zero included."""
        stmt = (
            select(
                User.id,
                User.email,
                User.first_name,
                User.last_name,
                func.count(Report.id).label("report_count"),
            )
            .outerjoin(Report, and_(Report.user_id == User.id, active(Report)))
            .where(active(User))
            .group_by(User.id, User.email, User.first_name, User.last_name, User.created_at)
            .order_by(User.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [UserReportCount(**row._mapping) for row in result.all()]

    async def find_users_by_email_domain(self, domain: str) -> list[User]:
        """Active users whose email domain is exactly `domain` (no subdomains)."""
        suffix = f"@{domain}"
        # Right-hand substring comparison: case-sensitive and free of LIKE wildcards
        tail = func.substr(User.email, func.length(User.email) - len(suffix) + 1)
        return await self._all(
            self._select_active().where(tail == suffix).order_by(User.created_at.desc())
        )
