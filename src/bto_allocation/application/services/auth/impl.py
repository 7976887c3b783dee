"""
Authentication Service Implementation
Concrete implementation of IAuthService
"""
from loguru import logger

from bto_allocation.core.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ValidationException,
)
from bto_allocation.core.logging_config import log_user_activity
from bto_allocation.domain.entities import Profile, User, build_user
from bto_allocation.domain.enums import MaritalStatus, UserRole
from bto_allocation.domain.value_objects import Nric
from bto_allocation.application.repositories import IUserRepository
from .interfaces import IAuthService, IPasswordHasher


MIN_PASSWORD_LENGTH = 8


class AuthService(IAuthService):
    """Authentication service implementation"""
    
    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher
    ):
        self.user_repo = user_repository
        self.password_hasher = password_hasher
    
    def register(
        self,
        role: UserRole,
        nric: str,
        password: str,
        age: int,
        marital_status: MaritalStatus
    ) -> User:
        """Register new user"""
        
        logger.info(f"Registration attempt: {nric} as {role}")
        
        if not Nric.is_valid(nric):
            raise ValidationException("nric", f"Invalid NRIC format: {nric}")
        
        if self.user_repo.exists(nric):
            logger.warning(f"Registration failed: NRIC already exists - {nric}")
            raise DuplicateResourceException("User", "nric", nric)
        
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException("password", f"must be at least {MIN_PASSWORD_LENGTH} characters")
        
        try:
            profile = Profile(
                nric=nric,
                password_hash=self.password_hasher.hash_password(password),
                age=age,
                marital_status=marital_status,
            )
        except ValueError as e:
            raise ValidationException("profile", str(e))
        
        user = self.user_repo.add(build_user(UserRole(role), profile))
        logger.info(f"User registered successfully: {nric} ({user.role.value})")
        
        return user
    
    def login(self, nric: str, password: str) -> User:
        """Authenticate user"""
        
        logger.info(f"Login attempt: {nric}")
        
        # Validate NRIC format
        if not Nric.is_valid(nric):
            raise ValidationException("nric", f"Invalid NRIC format: {nric}")
        
        # Find user
        user = self.user_repo.get_by_nric(nric)
        if not user:
            logger.warning(f"Login failed: User not found - {nric}")
            raise AuthenticationException("Invalid NRIC or password")
        
        # Verify password
        if not self.password_hasher.verify_password(password, user.password_hash):
            logger.warning(f"Login failed: Invalid password - {nric}")
            raise AuthenticationException("Invalid NRIC or password")
        
        log_user_activity("LOGIN", user.nric, user.role.value)
        logger.info(f"User logged in successfully: {nric}")
        
        return user
    
    def logout(self, user: User) -> None:
        log_user_activity("LOGOUT", user.nric, user.role.value)
        logger.info(f"User logged out: {user.nric}")
    
    def change_password(self, user: User, old_password: str, new_password: str) -> User:
        """Change password after verifying the current one"""
        
        if not self.password_hasher.verify_password(old_password, user.password_hash):
            logger.warning(f"Password change failed: wrong current password - {user.nric}")
            raise AuthenticationException("Current password is incorrect")
        
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationException("new_password", f"must be at least {MIN_PASSWORD_LENGTH} characters")
        
        user.profile.password_hash = self.password_hasher.hash_password(new_password)
        logger.info(f"Password changed: {user.nric}")
        
        return user
