"""
Bcrypt Password Hasher
Salted password hashes for stored user accounts
"""
from typing import Optional

import bcrypt
from loguru import logger

from bto_allocation.core.config import settings
from bto_allocation.application.services.auth.interfaces import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt with a configurable work factor"""
    
    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds or settings.BCRYPT_ROUNDS
    
    def hash_password(self, password: str) -> str:
        """Hash a plaintext password"""
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")
    
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash; malformed hashes never match"""
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False
