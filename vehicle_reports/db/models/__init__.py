from vehicle_reports.db.models.report import Report
from vehicle_reports.db.models.user import User

__all__ = ["User", "Report"]
