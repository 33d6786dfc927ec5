"""
Report service - business logic for vehicle reports (SOLID: Single Responsibility).
Challenge: Owner must exist at write time; approval is just a partial update.
Design: Service depends on abstractions (repositories); easy to test with mocks.
"""

import logging

from vehicle_reports.core.exceptions import NotFoundError
from vehicle_reports.db.models.report import Report
from vehicle_reports.db.repositories.report_repository import ReportRepository
from vehicle_reports.db.repositories.user_repository import UserRepository
from vehicle_reports.schemas.report import ReportCreate, ReportUpdate

logger = logging.getLogger(__name__)


class ReportService:
    """Handles all report use cases: CRUD, approval, filtered listings, price statistics."""

    def __init__(self, report_repo: ReportRepository, user_repo: UserRepository):
        self.report_repo = report_repo
        self.user_repo = user_repo

    async def create(self, data: ReportCreate, user_id: str) -> Report:
        """Create a report for an active user and return it with its owner loaded."""
        owner = await self.user_repo.find_one(user_id)
        if not owner:
            logger.warning("create report: no active user id=%s", user_id)
            raise NotFoundError(f"User with ID {user_id} not found")
        report = await self.report_repo.create(data.model_dump(), user_id)
        logger.info("Report created id=%s car=%s user_id=%s", report.id, report.car_identifier, user_id)
        # Reload with owner loaded to avoid lazy load in async context
        return await self.report_repo.find_one(report.id)

    async def find_all(self) -> list[Report]:
        return await self.report_repo.find_all()

    async def find_one(self, id: str) -> Report:
        report = await self.report_repo.find_one(id)
        if not report:
            raise NotFoundError(f"Report with ID {id} not found")
        return report

    async def find_by_user(self, user_id: str) -> list[Report]:
        return await self.report_repo.find_by_user(user_id)

    async def update(self, id: str, data: ReportUpdate) -> Report:
        report = await self.report_repo.update(id, data.to_patch())
        if not report:
            raise NotFoundError(f"Report with ID {id} not found")
        return report

    async def remove(self, id: str) -> None:
        deleted = await self.report_repo.soft_delete(id)
        if not deleted:
            raise NotFoundError(f"Report with ID {id} not found")
        logger.info("Report soft-deleted id=%s", id)

    async def approve_report(self, id: str) -> Report:
        """Same as update(id, is_approved=True), including NotFound."""
        report = await self.update(id, ReportUpdate(is_approved=True))
        logger.info("Report approved id=%s", id)
        return report

    async def find_by_make_and_model(self, make: str, model: str) -> list[Report]:
        return await self.report_repo.find_by_make_and_model(make, model)

    async def find_by_year_range(self, min_year: int, max_year: int) -> list[Report]:
        return await self.report_repo.find_by_year_range(min_year, max_year)

    async def find_approved(self) -> list[Report]:
        return await self.report_repo.find_approved()

    async def get_average_price(self, make: str, model: str, year: int | None = None) -> float:
        return await self.report_repo.find_average_price(make, model, year)
