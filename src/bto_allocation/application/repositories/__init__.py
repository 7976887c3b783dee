"""Repository contracts"""

from .interfaces import (
    IUserRepository,
    IProjectRepository,
    IApplicationRepository,
    IEnquiryRepository,
    Catalog,
)
__all__ = [
    "IUserRepository",
    "IProjectRepository",
    "IApplicationRepository",
    "IEnquiryRepository",
    "Catalog",
]
