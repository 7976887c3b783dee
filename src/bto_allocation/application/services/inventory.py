"""
Inventory Service
Remaining-unit queries and bounded unit movements per project
"""
from typing import Dict, Mapping, Set

from loguru import logger

from bto_allocation.core.exceptions import ConflictException, ResourceNotFoundException, ValidationException
from bto_allocation.domain.entities import Project, UnitCount
from bto_allocation.domain.enums import FlatType
from bto_allocation.application.repositories import IProjectRepository


class InventoryService:
    """Flat inventory store over the project repository"""
    
    def __init__(self, project_repository: IProjectRepository):
        self.project_repo = project_repository
    
    def _project(self, project_name: str) -> Project:
        project = self.project_repo.get_by_name(project_name)
        if project is None:
            raise ResourceNotFoundException("Project", project_name)
        return project
    
    def remaining(self, project_name: str, flat_type: FlatType) -> int:
        """Remaining units of one flat type"""
        return self._project(project_name).inventory.remaining(flat_type)
    
    def snapshot(self, project_name: str) -> Dict[FlatType, UnitCount]:
        """Total/remaining/booked per flat type"""
        return self._project(project_name).inventory.snapshot()
    
    def take_unit(self, project: Project, flat_type: FlatType) -> None:
        """Occupy one unit (delta -1)"""
        if flat_type not in project.inventory.flat_types:
            raise ValidationException("flat_type", f"{project.name} has no {flat_type.value} units")
        if not project.inventory.adjust(flat_type, -1):
            logger.warning(f"No {flat_type.value} units left in {project.name}")
            raise ConflictException(f"No {flat_type.display_name} units left in {project.name}")
        logger.info(
            f"Unit taken: {project.name} {flat_type.value} "
            f"remaining={project.inventory.remaining(flat_type)}"
        )
    
    def release_unit(self, project: Project, flat_type: FlatType) -> None:
        """Return one booked unit (delta +1)"""
        if not project.inventory.adjust(flat_type, +1):
            raise ConflictException(
                f"Cannot release {flat_type.value} unit in {project.name}: inventory already full"
            )
        logger.info(
            f"Unit released: {project.name} {flat_type.value} "
            f"remaining={project.inventory.remaining(flat_type)}"
        )
    
    def resize(self, project: Project, flat_units: Mapping[FlatType, int], locked_types: Set[FlatType]) -> None:
        """
        Replace totals after a manager edit
        
        Args:
            project: Project being edited
            flat_units: New total per flat type
            locked_types: Flat types referenced by active applications; they cannot be dropped
        """
        dropped = {flat_type for flat_type in project.inventory.flat_types if flat_units.get(flat_type, 0) == 0}
        blocked = dropped & set(locked_types)
        if blocked:
            names = ", ".join(sorted(flat_type.value for flat_type in blocked))
            raise ConflictException(f"Active applications still reference {names}")
        project.inventory.resize(flat_units)
        logger.info(f"Inventory resized for {project.name}: {project.inventory!r}")
