"""
Project Schemas
Validated manager input for creating and editing projects
"""
from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bto_allocation.domain.enums import FlatType, ProjectSort


class ProjectCreateRequest(BaseModel):
    """Create a BTO project"""
    
    model_config = ConfigDict(str_strip_whitespace=True)
    
    name: str = Field(..., min_length=1, max_length=100, examples=["Acacia Breeze"])
    neighborhood: str = Field(..., min_length=1, max_length=100, examples=["Yishun"])
    flat_units: Dict[FlatType, int] = Field(..., description="Total units per flat type")
    open_date: date
    close_date: date
    max_officer_slots: Optional[int] = Field(None, ge=1, le=10)
    visible: bool = False
    
    @field_validator("flat_units")
    @classmethod
    def validate_flat_units(cls, v: Dict[FlatType, int]) -> Dict[FlatType, int]:
        if not v:
            raise ValueError("At least one flat type is required")
        for flat_type, count in v.items():
            if count < 0:
                raise ValueError(f"{flat_type.value} units cannot be negative")
        if sum(v.values()) == 0:
            raise ValueError("A project must offer at least one unit")
        return v
    
    @model_validator(mode="after")
    def validate_window(self) -> "ProjectCreateRequest":
        if self.close_date < self.open_date:
            raise ValueError("close_date cannot be before open_date")
        return self


class ProjectUpdateRequest(BaseModel):
    """Edit an existing project; omitted fields are unchanged"""
    
    model_config = ConfigDict(str_strip_whitespace=True)
    
    neighborhood: Optional[str] = Field(None, min_length=1, max_length=100)
    flat_units: Optional[Dict[FlatType, int]] = None
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    max_officer_slots: Optional[int] = Field(None, ge=1, le=10)
    
    @field_validator("flat_units")
    @classmethod
    def validate_flat_units(cls, v: Optional[Dict[FlatType, int]]) -> Optional[Dict[FlatType, int]]:
        if v is None:
            return v
        for flat_type, count in v.items():
            if count < 0:
                raise ValueError(f"{flat_type.value} units cannot be negative")
        return v


class ProjectFilter(BaseModel):
    """Project listing filters"""
    
    neighborhood: Optional[str] = None
    flat_type: Optional[FlatType] = None
    sort: ProjectSort = ProjectSort.NAME
    
    def matches_neighborhood(self, neighborhood: str) -> bool:
        if not self.neighborhood:
            return True
        return self.neighborhood.strip().lower() in neighborhood.lower()
