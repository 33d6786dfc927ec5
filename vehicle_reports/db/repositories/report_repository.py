"""
Report repository - report data access, filters and aggregates (SOLID: Single Responsibility).
Challenge: Database query performance; avoid N+1, use indexes (year, user_id).
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from vehicle_reports.db.base import active
from vehicle_reports.db.models.report import Report
from vehicle_reports.db.models.user import User
from vehicle_reports.db.repositories.base_repository import BaseRepository


class ReportRepository(BaseRepository[Report]):
    """Report-specific queries. Uses selectinload to avoid N+1 when loading the owner."""

    def __init__(self, session):
        super().__init__(session, Report)

    def _relation_options(self):
        # A soft-deleted owner is not loaded; the report itself stays visible
        return [selectinload(Report.user.and_(active(User)))]

    def _select_approved(self):
        return self._select_active(with_relation=True).where(Report.is_approved.is_(True))

    async def create(self, fields: Mapping[str, Any], user_id: str) -> Report:
        """Persist a report owned by user_id. Owner existence is checked by the caller and the FK."""
        return await self.add(Report(**fields, user_id=user_id))

    async def find_by_user(self, user_id: str) -> list[Report]:
        """Active reports of one user, newest first. Owner relation not loaded."""
        return await self._all(
            self._select_active()
            .where(Report.user_id == user_id)
            .order_by(Report.created_at.desc())
        )

    async def find_by_make_and_model(self, make: str, model: str) -> list[Report]:
        return await self._all(
            self._select_approved()
            .where(Report.make == make, Report.model == model)
            .order_by(Report.created_at.desc())
        )

    async def find_by_year_range(self, min_year: int, max_year: int) -> list[Report]:
        """Approved reports with min_year <= year <= max_year, latest model year first."""
        return await self._all(
            self._select_approved()
            .where(Report.year.between(min_year, max_year))
            .order_by(Report.year.desc(), Report.created_at.desc())
        )

    async def find_approved(self) -> list[Report]:
        return await self._all(self._select_approved().order_by(Report.created_at.desc()))

    async def find_average_price(self, make: str, model: str, year: int | None = None) -> float:
        """Mean price of active approved reports for make/model (and year). 0.0 when none match."""
        stmt = select(func.avg(Report.price)).where(
            active(Report),
            Report.is_approved.is_(True),
            Report.make == make,
            Report.model == model,
        )
        if year is not None:
            stmt = stmt.where(Report.year == year)
        average = (await self.session.execute(stmt)).scalar_one()
        return float(average) if average is not None else 0.0
