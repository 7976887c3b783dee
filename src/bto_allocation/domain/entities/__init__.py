"""Domain Entities - Core business objects"""

from .user import (
    Profile,
    Applicant,
    Officer,
    Manager,
    User,
    ApplicantCapable,
    build_user,
    as_applicant,
    manages_applications_for,
)
from .flat_inventory import FlatInventory, UnitCount
from .project import Project
from .application import Application
from .enquiry import Enquiry
__all__ = [
    "Profile",
    "Applicant",
    "Officer",
    "Manager",
    "User",
    "ApplicantCapable",
    "build_user",
    "as_applicant",
    "manages_applications_for",
    "FlatInventory",
    "UnitCount",
    "Project",
    "Application",
    "Enquiry",
]
