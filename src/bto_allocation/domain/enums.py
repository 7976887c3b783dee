"""
Domain Enums
Business enumerations for the allocation system
"""
from enum import Enum
from typing import List


class FlatType(str, Enum):
    """Flat categories offered by a project, smallest first"""
    TWO_ROOM = "TWO_ROOM"
    THREE_ROOM = "THREE_ROOM"
    
    @property
    def display_name(self) -> str:
        return FLAT_TYPE_DISPLAY_NAMES[self]
    
    @property
    def rooms(self) -> int:
        return FLAT_TYPE_ROOMS[self]
    
    @classmethod
    def smallest(cls) -> "FlatType":
        """The category singles are restricted to"""
        return min(cls, key=lambda flat_type: flat_type.rooms)
    
    @classmethod
    def parse(cls, value: str) -> "FlatType":
        """Accept either the enum value or its display name"""
        normalized = value.strip().upper().replace("-", "_").replace(" ", "_")
        for flat_type in cls:
            if normalized in (flat_type.value, flat_type.display_name.upper().replace("-", "_")):
                return flat_type
        raise ValueError(f"Unknown flat type: {value}")


FLAT_TYPE_DISPLAY_NAMES = {
    FlatType.TWO_ROOM: "2-Room",
    FlatType.THREE_ROOM: "3-Room",
}

FLAT_TYPE_ROOMS = {
    FlatType.TWO_ROOM: 2,
    FlatType.THREE_ROOM: 3,
}


def ordered_flat_types() -> List[FlatType]:
    """All flat types ordered by room count"""
    return sorted(FlatType, key=lambda flat_type: flat_type.rooms)


class MaritalStatus(str, Enum):
    """Applicant marital status"""
    SINGLE = "SINGLE"
    MARRIED = "MARRIED"


class UserRole(str, Enum):
    """Role tag carried by every user variant"""
    APPLICANT = "APPLICANT"
    HDB_OFFICER = "HDB_OFFICER"
    HDB_MANAGER = "HDB_MANAGER"


class ProjectSort(str, Enum):
    """Orderings for project listings"""
    NAME = "name"
    NEIGHBORHOOD = "neighborhood"
    AVAILABLE_UNITS = "available_units"
