"""
Lifecycle Status Enums
Status enumerations for applications, enquiries and officer registrations
"""
from enum import Enum


class ApplicationStatus(str, Enum):
    """BTO application status"""
    PENDING = "PENDING"
    SUCCESSFUL = "SUCCESSFUL"
    UNSUCCESSFUL = "UNSUCCESSFUL"
    BOOKED = "BOOKED"


class EnquiryStatus(str, Enum):
    """Enquiry status, derived from the presence of a reply"""
    OPEN = "OPEN"
    REPLIED = "REPLIED"


class RegistrationStatus(str, Enum):
    """Officer registration status on a project roster"""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
