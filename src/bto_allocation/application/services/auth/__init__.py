"""Authentication services"""

from .interfaces import IPasswordHasher, IAuthService
from .impl import AuthService
__all__ = ["IPasswordHasher", "IAuthService", "AuthService"]
