"""
Project ORM Models
SQLAlchemy models for projects, their flat counts and officer rosters
"""
from sqlalchemy import Column, String, Integer, Boolean, Date, ForeignKey

from bto_allocation.core.database import Base


class ProjectModel(Base):
    """Project table ORM model"""
    
    __tablename__ = "projects"
    
    # Primary Key
    name = Column(String(100), primary_key=True)
    
    # Details
    neighborhood = Column(String(100), nullable=False, index=True)
    open_date = Column(Date, nullable=False)
    close_date = Column(Date, nullable=False)
    manager_nric = Column(String(9), ForeignKey("users.nric"), nullable=False, index=True)
    visible = Column(Boolean, nullable=False, default=False)
    max_officer_slots = Column(Integer, nullable=False, default=10)
    
    def __repr__(self):
        return f"<ProjectModel {self.name} ({self.neighborhood})>"


class ProjectFlatModel(Base):
    """Total and remaining units of one flat type in one project"""
    
    __tablename__ = "project_flats"
    
    project_name = Column(String(100), ForeignKey("projects.name"), primary_key=True)
    flat_type = Column(String(20), primary_key=True)
    total_units = Column(Integer, nullable=False)
    remaining_units = Column(Integer, nullable=False)
    
    def __repr__(self):
        return f"<ProjectFlatModel {self.project_name} {self.flat_type} {self.remaining_units}/{self.total_units}>"


class ProjectOfficerModel(Base):
    """Officer roster entry; position keeps registration order"""
    
    __tablename__ = "project_officers"
    
    project_name = Column(String(100), ForeignKey("projects.name"), primary_key=True)
    officer_nric = Column(String(9), ForeignKey("users.nric"), primary_key=True)
    position = Column(Integer, nullable=False)
    
    def __repr__(self):
        return f"<ProjectOfficerModel {self.project_name} {self.officer_nric}>"
