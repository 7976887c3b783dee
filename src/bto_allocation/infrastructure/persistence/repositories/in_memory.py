"""
In-Memory Repository Implementations
Flat ID-keyed collections backing the catalog
"""
from typing import Dict, List, Optional
from uuid import uuid4

from loguru import logger

from bto_allocation.core.exceptions import DuplicateResourceException
from bto_allocation.domain.entities import Application, Enquiry, Project, User
from bto_allocation.application.repositories import (
    Catalog,
    IApplicationRepository,
    IEnquiryRepository,
    IProjectRepository,
    IUserRepository,
)


def _short_id(length: int) -> str:
    return uuid4().hex[:length]


class InMemoryUserRepository(IUserRepository):
    """Users keyed by NRIC"""
    
    def __init__(self):
        self._users: Dict[str, User] = {}
    
    def get_by_nric(self, nric: str) -> Optional[User]:
        return self._users.get(nric)
    
    def add(self, user: User) -> User:
        if user.nric in self._users:
            raise DuplicateResourceException("User", "nric", user.nric)
        self._users[user.nric] = user
        return user
    
    def list_all(self) -> List[User]:
        return list(self._users.values())


class InMemoryProjectRepository(IProjectRepository):
    """Projects keyed by name"""
    
    def __init__(self):
        self._projects: Dict[str, Project] = {}
    
    def get_by_name(self, name: str) -> Optional[Project]:
        return self._projects.get(name)
    
    def add(self, project: Project) -> Project:
        if project.name in self._projects:
            raise DuplicateResourceException("Project", "name", project.name)
        self._projects[project.name] = project
        return project
    
    def remove(self, name: str) -> bool:
        return self._projects.pop(name, None) is not None
    
    def list_all(self) -> List[Project]:
        return list(self._projects.values())


class InMemoryApplicationRepository(IApplicationRepository):
    """Active applications keyed by generated ID"""
    
    def __init__(self, id_length: int = 12):
        self._applications: Dict[str, Application] = {}
        self.id_length = id_length
    
    def get_by_id(self, application_id: str) -> Optional[Application]:
        return self._applications.get(application_id)
    
    def add(self, application: Application) -> Application:
        if application.id in self._applications:
            raise DuplicateResourceException("Application", "id", application.id)
        self._applications[application.id] = application
        return application
    
    def remove(self, application_id: str) -> bool:
        return self._applications.pop(application_id, None) is not None
    
    def list_all(self) -> List[Application]:
        return list(self._applications.values())
    
    def next_id(self) -> str:
        while True:
            candidate = _short_id(self.id_length)
            if candidate not in self._applications:
                return candidate


class InMemoryEnquiryRepository(IEnquiryRepository):
    """Enquiries keyed by short generated ID"""
    
    def __init__(self, id_length: int = 8):
        self._enquiries: Dict[str, Enquiry] = {}
        self.id_length = id_length
    
    def get_by_id(self, enquiry_id: str) -> Optional[Enquiry]:
        return self._enquiries.get(enquiry_id)
    
    def add(self, enquiry: Enquiry) -> Enquiry:
        if enquiry.id in self._enquiries:
            raise DuplicateResourceException("Enquiry", "id", enquiry.id)
        self._enquiries[enquiry.id] = enquiry
        return enquiry
    
    def remove(self, enquiry_id: str) -> bool:
        return self._enquiries.pop(enquiry_id, None) is not None
    
    def list_all(self) -> List[Enquiry]:
        return list(self._enquiries.values())
    
    def next_id(self) -> str:
        while True:
            candidate = _short_id(self.id_length)
            if candidate not in self._enquiries:
                return candidate


def new_catalog(enquiry_id_length: int = 8) -> Catalog:
    """Empty in-memory catalog"""
    logger.debug("Creating empty in-memory catalog")
    return Catalog(
        users=InMemoryUserRepository(),
        projects=InMemoryProjectRepository(),
        applications=InMemoryApplicationRepository(),
        enquiries=InMemoryEnquiryRepository(id_length=enquiry_id_length),
    )
