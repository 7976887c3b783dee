"""
Application ORM Model
SQLAlchemy model for active BTO applications
"""
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey

from bto_allocation.core.database import Base


class ApplicationModel(Base):
    """BTO application table ORM model"""
    
    __tablename__ = "applications"
    
    # Primary Key
    id = Column(String(32), primary_key=True)
    
    # Foreign Keys
    applicant_nric = Column(String(9), ForeignKey("users.nric"), nullable=False, unique=True)
    project_name = Column(String(100), ForeignKey("projects.name"), nullable=False, index=True)
    
    # Application Details
    flat_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    withdrawal_requested = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    
    # Booking
    booked_at = Column(DateTime(timezone=True), nullable=True)
    booked_by = Column(String(9), nullable=True)
    
    def __repr__(self):
        return f"<ApplicationModel {self.id} - {self.status}>"
