"""Request schemas for administrative commands and queries"""

from .project import ProjectCreateRequest, ProjectUpdateRequest, ProjectFilter
from .report import ReportFilter, ApplicationReportRow, BookingReceipt
__all__ = [
    "ProjectCreateRequest",
    "ProjectUpdateRequest",
    "ProjectFilter",
    "ReportFilter",
    "ApplicationReportRow",
    "BookingReceipt",
]
