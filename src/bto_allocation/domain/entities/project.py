"""
Project Domain Entity
BTO project with flat inventory, officer roster and ID indexes
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List

from ..value_objects import DateWindow
from .flat_inventory import FlatInventory


DEFAULT_MAX_OFFICER_SLOTS = 10


@dataclass
class Project:
    """BTO project domain entity"""

    name: str
    neighborhood: str
    window: DateWindow
    inventory: FlatInventory
    manager_nric: str
    visible: bool = False
    max_officer_slots: int = DEFAULT_MAX_OFFICER_SLOTS

    # Officer roster (NRICs, pending and approved)
    officers: List[str] = field(default_factory=list)

    # Arena indexes
    application_ids: List[str] = field(default_factory=list)
    enquiry_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate project data"""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Project name cannot be empty")
        if not self.neighborhood or len(self.neighborhood.strip()) == 0:
            raise ValueError("Neighborhood cannot be empty")
        if self.max_officer_slots < 1:
            raise ValueError("A project needs at least one officer slot")
        if len(set(self.officers)) != len(self.officers):
            raise ValueError("Officer roster contains duplicates")
        if len(self.officers) > self.max_officer_slots:
            raise ValueError("Officer roster exceeds the slot limit")

    @property
    def open_date(self) -> date:
        return self.window.open_date

    @property
    def close_date(self) -> date:
        return self.window.close_date

    @property
    def remaining_officer_slots(self) -> int:
        return self.max_officer_slots - len(self.officers)

    def is_open_on(self, day: date) -> bool:
        """Visible and inside the application window"""
        return self.visible and self.window.contains(day)

    def overlaps(self, other: "Project") -> bool:
        return self.window.overlaps(other.window)

    def has_officer(self, nric: str) -> bool:
        return nric in self.officers

    def add_officer(self, nric: str) -> bool:
        """Append to the roster; False when full or already rostered"""
        if len(self.officers) >= self.max_officer_slots:
            return False
        if nric in self.officers:
            return False
        self.officers.append(nric)
        return True

    def remove_officer(self, nric: str) -> bool:
        if nric not in self.officers:
            return False
        self.officers.remove(nric)
        return True

    def attach_application(self, application_id: str) -> None:
        if application_id not in self.application_ids:
            self.application_ids.append(application_id)

    def detach_application(self, application_id: str) -> None:
        if application_id in self.application_ids:
            self.application_ids.remove(application_id)

    def attach_enquiry(self, enquiry_id: str) -> None:
        if enquiry_id not in self.enquiry_ids:
            self.enquiry_ids.append(enquiry_id)

    def detach_enquiry(self, enquiry_id: str) -> None:
        if enquiry_id in self.enquiry_ids:
            self.enquiry_ids.remove(enquiry_id)

    def __str__(self) -> str:
        return f"Project({self.name}, {self.neighborhood}, {self.window})"
