"""
User ORM Model
SQLAlchemy model for applicants, officers and managers
"""
from sqlalchemy import Column, String, Integer, Boolean

from bto_allocation.core.database import Base


class UserModel(Base):
    """User table ORM model; one row per role variant"""
    
    __tablename__ = "users"
    
    # Primary Key
    nric = Column(String(9), primary_key=True)
    
    # Profile
    password_hash = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    marital_status = Column(String(20), nullable=False)
    role = Column(String(20), nullable=False, index=True)
    
    # Applicant / officer
    current_application_id = Column(String(32), nullable=True)
    
    # Officer
    assigned_project = Column(String(100), nullable=True)
    registration_approved = Column(Boolean, nullable=False, default=False)
    
    # Manager
    current_project = Column(String(100), nullable=True)
    
    def __repr__(self):
        return f"<UserModel {self.nric} - {self.role}>"
