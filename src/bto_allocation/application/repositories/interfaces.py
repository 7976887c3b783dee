"""
Repository Interfaces (Abstract Base Classes)
Define contracts for the in-memory catalog without storage details
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from bto_allocation.domain.entities import Application, Enquiry, Project, User


class IUserRepository(ABC):
    """User repository interface"""
    
    @abstractmethod
    def get_by_nric(self, nric: str) -> Optional[User]:
        """Get user by NRIC"""
        pass
    
    @abstractmethod
    def add(self, user: User) -> User:
        """Register a user; NRIC must be unique"""
        pass
    
    @abstractmethod
    def list_all(self) -> List[User]:
        """All users in insertion order"""
        pass
    
    def exists(self, nric: str) -> bool:
        """Check if user exists by NRIC"""
        return self.get_by_nric(nric) is not None


class IProjectRepository(ABC):
    """Project repository interface"""
    
    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Project]:
        """Get project by its unique name"""
        pass
    
    @abstractmethod
    def add(self, project: Project) -> Project:
        """Store a new project; name must be unique"""
        pass
    
    @abstractmethod
    def remove(self, name: str) -> bool:
        """Delete project"""
        pass
    
    @abstractmethod
    def list_all(self) -> List[Project]:
        """All projects in insertion order"""
        pass
    
    def exists(self, name: str) -> bool:
        return self.get_by_name(name) is not None


class IApplicationRepository(ABC):
    """Application repository interface"""
    
    @abstractmethod
    def get_by_id(self, application_id: str) -> Optional[Application]:
        """Get application by ID"""
        pass
    
    @abstractmethod
    def add(self, application: Application) -> Application:
        """Store a new application"""
        pass
    
    @abstractmethod
    def remove(self, application_id: str) -> bool:
        """Drop an application from the active set"""
        pass
    
    @abstractmethod
    def list_all(self) -> List[Application]:
        """All active applications"""
        pass
    
    @abstractmethod
    def next_id(self) -> str:
        """Generate an unused application ID"""
        pass
    
    def list_for_project(self, project_name: str) -> List[Application]:
        return [app for app in self.list_all() if app.project_name == project_name]
    
    def get_active_for_applicant(self, nric: str) -> Optional[Application]:
        for app in self.list_all():
            if app.applicant_nric == nric:
                return app
        return None


class IEnquiryRepository(ABC):
    """Enquiry repository interface"""
    
    @abstractmethod
    def get_by_id(self, enquiry_id: str) -> Optional[Enquiry]:
        """Get enquiry by ID"""
        pass
    
    @abstractmethod
    def add(self, enquiry: Enquiry) -> Enquiry:
        """Store a new enquiry"""
        pass
    
    @abstractmethod
    def remove(self, enquiry_id: str) -> bool:
        """Delete enquiry"""
        pass
    
    @abstractmethod
    def list_all(self) -> List[Enquiry]:
        """All enquiries in insertion order"""
        pass
    
    @abstractmethod
    def next_id(self) -> str:
        """Generate an unused enquiry ID"""
        pass
    
    def list_for_project(self, project_name: str) -> List[Enquiry]:
        return [enquiry for enquiry in self.list_all() if enquiry.project_name == project_name]
    
    def list_for_creator(self, nric: str) -> List[Enquiry]:
        return [enquiry for enquiry in self.list_all() if enquiry.creator_nric == nric]


@dataclass
class Catalog:
    """Every repository the core reads and mutates, loaded once at startup"""
    
    users: IUserRepository
    projects: IProjectRepository
    applications: IApplicationRepository
    enquiries: IEnquiryRepository
