"""
Authentication Service Interfaces
Abstract base classes for authentication services
"""
from abc import ABC, abstractmethod

from bto_allocation.domain.entities import User
from bto_allocation.domain.enums import MaritalStatus, UserRole


class IPasswordHasher(ABC):
    """Password hashing interface"""
    
    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Hash a plain password"""
        pass
    
    @abstractmethod
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        pass


class IAuthService(ABC):
    """Authentication service interface"""
    
    @abstractmethod
    def register(
        self,
        role: UserRole,
        nric: str,
        password: str,
        age: int,
        marital_status: MaritalStatus
    ) -> User:
        """Create an account with a hashed password"""
        pass
    
    @abstractmethod
    def login(self, nric: str, password: str) -> User:
        """
        Authenticate user by NRIC and password
        
        Returns:
            The authenticated user variant
        """
        pass
    
    @abstractmethod
    def logout(self, user: User) -> None:
        """Record the end of a session"""
        pass
    
    @abstractmethod
    def change_password(self, user: User, old_password: str, new_password: str) -> User:
        """Replace the user's password after re-checking the old one"""
        pass
