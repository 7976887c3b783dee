"""
Date Window Value Object
Immutable inclusive application period
"""
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [open_date, close_date] application period"""
    
    open_date: date
    close_date: date
    
    def __post_init__(self):
        """Validate ordering"""
        if self.close_date < self.open_date:
            raise ValueError("Closing date cannot be before opening date")
    
    def overlaps(self, other: "DateWindow") -> bool:
        """Two inclusive windows overlap unless one ends before the other starts"""
        return not (
            self.close_date < other.open_date or
            self.open_date > other.close_date
        )
    
    def contains(self, day: date) -> bool:
        """Check if a day falls inside the window"""
        return self.open_date <= day <= self.close_date
    
    def __str__(self) -> str:
        return f"{self.open_date.isoformat()} to {self.close_date.isoformat()}"
