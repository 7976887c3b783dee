"""
Command Results
Success/failure envelope returned by every allocation command
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from bto_allocation.core.exceptions import DomainException


T = TypeVar("T")


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """Outcome of a command: the updated entity, or the error that stopped it"""
    
    ok: bool
    value: Optional[T] = None
    error: Optional[DomainException] = None
    
    # None when no flush was attempted
    persisted: Optional[bool] = None
    
    @classmethod
    def success(cls, value: Optional[T] = None, persisted: Optional[bool] = None) -> "CommandResult[T]":
        return cls(ok=True, value=value, persisted=persisted)
    
    @classmethod
    def failure(cls, error: DomainException) -> "CommandResult[T]":
        return cls(ok=False, error=error)
    
    @property
    def message(self) -> str:
        if self.error is not None:
            return str(self.error)
        return "OK"
    
    def __bool__(self) -> bool:
        return self.ok
