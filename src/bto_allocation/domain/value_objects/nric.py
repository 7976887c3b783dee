"""
NRIC Value Object
Immutable national identity number with validation
"""
import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Nric:
    """NRIC value object with validation"""
    
    value: str
    
    def __post_init__(self):
        """Validate NRIC format"""
        if not self.is_valid(self.value):
            raise ValueError(f"Invalid NRIC format: {self.value}")
    
    @staticmethod
    def is_valid(nric: str) -> bool:
        """S or T, seven digits, then a letter"""
        if not isinstance(nric, str):
            return False
        return bool(re.fullmatch(r"[ST]\d{7}[A-Z]", nric))
    
    def __str__(self) -> str:
        return self.value
    
    def __repr__(self) -> str:
        return f"Nric({self.value})"
