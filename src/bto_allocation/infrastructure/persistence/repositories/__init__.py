"""Repository implementations"""

from .in_memory import (
    InMemoryUserRepository,
    InMemoryProjectRepository,
    InMemoryApplicationRepository,
    InMemoryEnquiryRepository,
    new_catalog,
)
__all__ = [
    "InMemoryUserRepository",
    "InMemoryProjectRepository",
    "InMemoryApplicationRepository",
    "InMemoryEnquiryRepository",
    "new_catalog",
]
