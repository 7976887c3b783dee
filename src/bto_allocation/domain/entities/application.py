"""
Application Domain Entity
One applicant's claim on one flat type of one project
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from bto_allocation.core.exceptions import StateException, ValidationException

from ..enums import FlatType
from ..value_objects import ApplicationStatus


OUTCOME_STATUSES = frozenset({ApplicationStatus.SUCCESSFUL, ApplicationStatus.UNSUCCESSFUL})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Application:
    """
    BTO application state machine.

    PENDING -> SUCCESSFUL | UNSUCCESSFUL, SUCCESSFUL -> BOOKED.
    withdrawal_requested is an orthogonal flag; an approved withdrawal
    removes the application from the active set rather than setting a status.
    """

    id: str
    applicant_nric: str
    project_name: str
    flat_type: FlatType
    status: ApplicationStatus = ApplicationStatus.PENDING
    withdrawal_requested: bool = False
    created_at: datetime = field(default_factory=utcnow)

    # Booking
    booked_at: Optional[datetime] = None
    booked_by: Optional[str] = None

    def __post_init__(self):
        self.flat_type = FlatType(self.flat_type)
        self.status = ApplicationStatus(self.status)

    def is_booked(self) -> bool:
        return self.status == ApplicationStatus.BOOKED

    def set_outcome(self, status: ApplicationStatus) -> None:
        """Officer decision on a pending application"""
        status = ApplicationStatus(status)
        if status not in OUTCOME_STATUSES:
            raise ValidationException(
                "status", "Outcome must be SUCCESSFUL or UNSUCCESSFUL; booking has its own action"
            )
        if self.status != ApplicationStatus.PENDING:
            raise StateException("application", self.status.value, f"mark {status.value}")
        self.status = status

    def ensure_bookable(self) -> None:
        if self.status != ApplicationStatus.SUCCESSFUL:
            raise StateException("application", self.status.value, "book")
        if self.withdrawal_requested:
            raise StateException("application", "WITHDRAWAL_REQUESTED", "book")

    def mark_booked(self, officer_nric: str, at: Optional[datetime] = None) -> None:
        """Record the booking; the caller has already taken the unit"""
        self.ensure_bookable()
        self.status = ApplicationStatus.BOOKED
        self.booked_at = at or utcnow()
        self.booked_by = officer_nric

    def request_withdrawal(self) -> None:
        """Flag for withdrawal; refused once a flat is booked"""
        if self.status == ApplicationStatus.BOOKED:
            raise StateException("application", self.status.value, "request withdrawal of")
        self.withdrawal_requested = True

    def ensure_withdrawal_requested(self) -> None:
        if not self.withdrawal_requested:
            raise StateException("application", self.status.value, "approve withdrawal without a request on")

    def reject_withdrawal(self) -> None:
        """Clear a pending withdrawal request"""
        if not self.withdrawal_requested:
            raise StateException("application", self.status.value, "reject withdrawal without a request on")
        self.withdrawal_requested = False

    def __str__(self) -> str:
        flag = ", withdrawal requested" if self.withdrawal_requested else ""
        return f"Application({self.id}, {self.flat_type.value}, status={self.status.value}{flag})"
