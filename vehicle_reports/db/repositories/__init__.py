# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from vehicle_reports.db.repositories.report_repository import ReportRepository
from vehicle_reports.db.repositories.user_repository import UserReportCount, UserRepository

__all__ = ["UserRepository", "ReportRepository", "UserReportCount"]
