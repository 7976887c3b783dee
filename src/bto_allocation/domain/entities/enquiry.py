"""
Enquiry Domain Entity
Question about a project with a write-once reply
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bto_allocation.core.exceptions import (
    AuthorizationException,
    StateException,
    ValidationException,
)

from ..value_objects import EnquiryStatus
from .application import utcnow


@dataclass
class Enquiry:
    """Enquiry domain entity; immutable once replied"""

    id: str
    creator_nric: str
    project_name: str
    content: str
    created_at: datetime = field(default_factory=utcnow)

    # Reply (write-once)
    reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    replied_by: Optional[str] = None

    def __post_init__(self):
        """Validate enquiry content"""
        self.content = _clean_text("content", self.content)

    @property
    def status(self) -> EnquiryStatus:
        return EnquiryStatus.REPLIED if self.has_reply() else EnquiryStatus.OPEN

    def has_reply(self) -> bool:
        return bool(self.reply)

    def is_creator(self, nric: str) -> bool:
        return self.creator_nric == nric

    def ensure_modifiable_by(self, nric: str, action: str) -> None:
        """Creator-only, and only before a reply"""
        if not self.is_creator(nric):
            raise AuthorizationException(f"Only the creator may {action} enquiry {self.id}")
        if self.has_reply():
            raise StateException("enquiry", self.status.value, action)

    def edit(self, nric: str, content: str) -> None:
        self.ensure_modifiable_by(nric, "edit")
        self.content = _clean_text("content", content)

    def add_reply(self, reply: str, replier_nric: str, at: Optional[datetime] = None) -> None:
        """Attach the one and only reply"""
        if self.has_reply():
            raise StateException("enquiry", self.status.value, "reply to")
        self.reply = _clean_text("reply", reply)
        self.replied_at = at or utcnow()
        self.replied_by = replier_nric

    def __str__(self) -> str:
        return f"Enquiry({self.id}, project={self.project_name}, status={self.status.value})"


def _clean_text(field_name: str, value: str) -> str:
    if not isinstance(value, str) or len(value.strip()) == 0:
        raise ValidationException(field_name, "cannot be empty")
    return value.strip()
