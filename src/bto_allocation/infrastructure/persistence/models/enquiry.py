"""
Enquiry ORM Model
SQLAlchemy model for project enquiries
"""
from sqlalchemy import Column, String, DateTime, Text, ForeignKey

from bto_allocation.core.database import Base


class EnquiryModel(Base):
    """Enquiry table ORM model"""
    
    __tablename__ = "enquiries"
    
    # Primary Key
    id = Column(String(32), primary_key=True)
    
    # Foreign Keys
    creator_nric = Column(String(9), ForeignKey("users.nric"), nullable=False, index=True)
    project_name = Column(String(100), ForeignKey("projects.name"), nullable=False, index=True)
    
    # Content
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    
    # Reply (write-once)
    reply = Column(Text, nullable=True)
    replied_at = Column(DateTime(timezone=True), nullable=True)
    replied_by = Column(String(9), nullable=True)
    
    def __repr__(self):
        return f"<EnquiryModel {self.id} - {self.project_name}>"
