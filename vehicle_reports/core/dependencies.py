"""
FastAPI dependencies - service construction per request (SOLID: Dependency Inversion).
Challenge: Routers stay thin; repositories share the request-scoped session.
"""

from typing import Annotated

from fastapi import Depends

from vehicle_reports.db.repositories.report_repository import ReportRepository
from vehicle_reports.db.repositories.user_repository import UserRepository
from vehicle_reports.db.session import DbSession
from vehicle_reports.services.report_service import ReportService
from vehicle_reports.services.user_service import UserService


def get_user_service(session: DbSession) -> UserService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return UserService(UserRepository(session))


def get_report_service(session: DbSession) -> ReportService:
    return ReportService(ReportRepository(session), UserRepository(session))


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
