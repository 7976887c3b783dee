"""
User Domain Entities
Closed set of role variants sharing one profile
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..enums import MaritalStatus, UserRole
from ..value_objects import Nric


@dataclass
class Profile:
    """Identity and eligibility attributes common to every role"""
    
    nric: str
    password_hash: str
    age: int
    marital_status: MaritalStatus
    
    def __post_init__(self):
        """Validate profile data"""
        Nric(self.nric)
        if not isinstance(self.age, int) or self.age < 0:
            raise ValueError(f"Age must be a non-negative integer: {self.age}")
        self.marital_status = MaritalStatus(self.marital_status)


class _ProfileAccess:
    """Read-through accessors onto the wrapped profile"""
    
    profile: Profile
    
    @property
    def nric(self) -> str:
        return self.profile.nric
    
    @property
    def age(self) -> int:
        return self.profile.age
    
    @property
    def marital_status(self) -> MaritalStatus:
        return self.profile.marital_status
    
    @property
    def password_hash(self) -> str:
        return self.profile.password_hash


@dataclass
class Applicant(_ProfileAccess):
    """Applicant: owns zero or one active application"""
    
    profile: Profile
    current_application_id: Optional[str] = None
    
    @property
    def role(self) -> UserRole:
        return UserRole.APPLICANT
    
    def __str__(self) -> str:
        return f"Applicant({self.nric})"


@dataclass
class Officer(_ProfileAccess):
    """HDB officer: applicant capabilities plus one managed project"""
    
    profile: Profile
    current_application_id: Optional[str] = None
    assigned_project: Optional[str] = None
    registration_approved: bool = False
    
    @property
    def role(self) -> UserRole:
        return UserRole.HDB_OFFICER
    
    def assign(self, project_name: str) -> None:
        """Record a pending registration"""
        self.assigned_project = project_name
        self.registration_approved = False
    
    def clear_assignment(self) -> None:
        self.assigned_project = None
        self.registration_approved = False
    
    def __str__(self) -> str:
        return f"Officer({self.nric}, project={self.assigned_project})"


@dataclass
class Manager(_ProfileAccess):
    """HDB manager: creates projects and tracks one current project"""
    
    profile: Profile
    created_projects: List[str] = field(default_factory=list)
    current_project: Optional[str] = None
    
    @property
    def role(self) -> UserRole:
        return UserRole.HDB_MANAGER
    
    def record_created_project(self, project_name: str) -> None:
        """Track a new project and make it the current one"""
        if project_name not in self.created_projects:
            self.created_projects.append(project_name)
        self.current_project = project_name
    
    def forget_project(self, project_name: str) -> None:
        if project_name in self.created_projects:
            self.created_projects.remove(project_name)
        if self.current_project == project_name:
            self.current_project = None
    
    def __str__(self) -> str:
        return f"Manager({self.nric})"


User = Union[Applicant, Officer, Manager]
ApplicantCapable = Union[Applicant, Officer]


def build_user(role: UserRole, profile: Profile) -> User:
    """Construct the variant for a role tag"""
    match UserRole(role):
        case UserRole.APPLICANT:
            return Applicant(profile=profile)
        case UserRole.HDB_OFFICER:
            return Officer(profile=profile)
        case UserRole.HDB_MANAGER:
            return Manager(profile=profile)


def as_applicant(user: User) -> Optional[ApplicantCapable]:
    """The user's applicant capability, if the variant has one"""
    match user:
        case Applicant() | Officer():
            return user
        case _:
            return None


def manages_applications_for(user: User, project_name: str) -> bool:
    """Approved officers manage applications and enquiries of their project"""
    match user:
        case Officer(assigned_project=assigned, registration_approved=True):
            return assigned == project_name
        case _:
            return False
