"""Application services"""

from .inventory import InventoryService
from .lifecycle import ApplicationLifecycleService
from .officer_assignment import OfficerAssignmentService
from .enquiry import EnquiryService
from .project import ProjectService
from .reporting import ReportService
from .allocation_engine import AllocationEngine
__all__ = [
    "InventoryService",
    "ApplicationLifecycleService",
    "OfficerAssignmentService",
    "EnquiryService",
    "ProjectService",
    "ReportService",
    "AllocationEngine",
]
