"""
Report Schemas
Application report filters, rows and booking receipts
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from bto_allocation.domain.enums import FlatType, MaritalStatus
from bto_allocation.domain.value_objects import ApplicationStatus


class ReportFilter(BaseModel):
    """Filters for the manager's application report"""
    
    project_name: Optional[str] = None
    status: Optional[ApplicationStatus] = None
    flat_type: Optional[FlatType] = None
    marital_status: Optional[MaritalStatus] = None
    withdrawal_requested: Optional[bool] = None


class ApplicationReportRow(BaseModel):
    """One application joined with its applicant and project"""
    
    application_id: str
    applicant_nric: str
    age: int
    marital_status: MaritalStatus
    project_name: str
    neighborhood: str
    flat_type: FlatType
    status: ApplicationStatus
    withdrawal_requested: bool


class BookingReceipt(BaseModel):
    """Receipt issued for a booked flat"""
    
    application_id: str
    applicant_nric: str
    age: int
    marital_status: MaritalStatus
    project_name: str
    neighborhood: str
    flat_type: FlatType
    booked_at: datetime
    booked_by: Optional[str] = None
