"""Value Objects - Immutable objects defined by their attributes"""

from .nric import Nric
from .date_window import DateWindow
from .statuses import ApplicationStatus, EnquiryStatus, RegistrationStatus
__all__ = [
    "Nric",
    "DateWindow",
    "ApplicationStatus",
    "EnquiryStatus",
    "RegistrationStatus",
]
