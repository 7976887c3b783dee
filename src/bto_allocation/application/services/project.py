"""
Project Service
Manager administration of projects and role-aware project listings
"""
from datetime import date
from typing import List, Optional

from loguru import logger

from bto_allocation.core.exceptions import (
    AuthorizationException,
    ConflictException,
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from bto_allocation.domain.entities import (
    Applicant,
    FlatInventory,
    Manager,
    Officer,
    Project,
    User,
)
from bto_allocation.domain.enums import ProjectSort
from bto_allocation.domain.policies import can_open_project, eligible_flat_types
from bto_allocation.domain.value_objects import DateWindow
from bto_allocation.application.repositories import Catalog
from bto_allocation.application.schemas import (
    ProjectCreateRequest,
    ProjectFilter,
    ProjectUpdateRequest,
)
from .inventory import InventoryService


class ProjectService:
    """Project creation, editing, visibility and listings"""

    def __init__(
        self,
        catalog: Catalog,
        inventory_service: InventoryService,
        default_max_officer_slots: int = 10
    ):
        self.catalog = catalog
        self.inventory = inventory_service
        self.default_max_officer_slots = default_max_officer_slots

    def get(self, name: str) -> Project:
        project = self.catalog.projects.get_by_name(name)
        if project is None:
            raise ResourceNotFoundException("Project", name)
        return project

    def _ensure_owner(self, manager: Manager, project: Project) -> None:
        if project.manager_nric != manager.nric:
            raise AuthorizationException(f"Manager {manager.nric} does not manage project {project.name}")

    def current_project_of(self, manager: Manager) -> Optional[Project]:
        if manager.current_project is None:
            return None
        return self.catalog.projects.get_by_name(manager.current_project)

    def create(self, manager: Manager, request: ProjectCreateRequest) -> Project:
        """
        Open a new project for a manager

        Raises:
            DuplicateResourceException: name taken
            ConflictException: window overlaps the manager's current project
        """
        if self.catalog.projects.exists(request.name):
            raise DuplicateResourceException("Project", "name", request.name)

        window = DateWindow(request.open_date, request.close_date)
        current = self.current_project_of(manager)
        if not can_open_project(current, window):
            logger.warning(f"Manager {manager.nric} overlap: {request.name} vs {current.name}")
            raise ConflictException(
                f"Application period {window} overlaps current project {current.name} ({current.window})"
            )

        project = Project(
            name=request.name,
            neighborhood=request.neighborhood,
            window=window,
            inventory=FlatInventory(request.flat_units),
            manager_nric=manager.nric,
            visible=request.visible,
            max_officer_slots=request.max_officer_slots or self.default_max_officer_slots,
        )
        self.catalog.projects.add(project)
        manager.record_created_project(project.name)

        logger.info(f"Project created by {manager.nric}: {project} {project.inventory!r}")
        return project

    def set_visibility(self, manager: Manager, project: Project, visible: bool) -> Project:
        self._ensure_owner(manager, project)
        project.visible = visible
        logger.info(f"Project {project.name} visibility -> {'visible' if visible else 'hidden'}")
        return project

    def toggle_visibility(self, manager: Manager, project: Project) -> Project:
        return self.set_visibility(manager, project, not project.visible)

    def edit(self, manager: Manager, project: Project, request: ProjectUpdateRequest) -> Project:
        """Apply a manager edit; every check runs before anything changes"""
        self._ensure_owner(manager, project)

        open_date = request.open_date or project.open_date
        close_date = request.close_date or project.close_date
        if close_date < open_date:
            raise ValidationException("close_date", "cannot be before open_date")
        window = DateWindow(open_date, close_date)

        if window != project.window:
            self._ensure_officers_fit(project, window)

        if request.max_officer_slots is not None and request.max_officer_slots < len(project.officers):
            raise ConflictException(
                f"Project {project.name} already has {len(project.officers)} officers rostered"
            )

        if request.flat_units is not None:
            locked = {app.flat_type for app in self.catalog.applications.list_for_project(project.name)}
            self.inventory.resize(project, request.flat_units, locked)

        if request.neighborhood:
            project.neighborhood = request.neighborhood
        if request.max_officer_slots is not None:
            project.max_officer_slots = request.max_officer_slots
        project.window = window

        logger.info(f"Project {project.name} edited by {manager.nric}")
        return project

    def _ensure_officers_fit(self, project: Project, window: DateWindow) -> None:
        """Approved officers must not end up on two overlapping projects"""
        for nric in project.officers:
            for other in self.catalog.projects.list_all():
                if other.name != project.name and other.has_officer(nric) and other.window.overlaps(window):
                    raise ConflictException(
                        f"Officer {nric} is also rostered on {other.name}, which would overlap"
                    )

    def delete(self, manager: Manager, project: Project) -> Project:
        """Remove a project that has no active applications"""
        self._ensure_owner(manager, project)
        if self.catalog.applications.list_for_project(project.name):
            raise ConflictException(f"Project {project.name} still has active applications")

        for nric in list(project.officers):
            user = self.catalog.users.get_by_nric(nric)
            if isinstance(user, Officer) and user.assigned_project == project.name:
                user.clear_assignment()

        for enquiry in self.catalog.enquiries.list_for_project(project.name):
            self.catalog.enquiries.remove(enquiry.id)

        self.catalog.projects.remove(project.name)
        manager.forget_project(project.name)

        logger.info(f"Project {project.name} deleted by {manager.nric}")
        return project

    def list_for(self, user: User, today: date, filters: Optional[ProjectFilter] = None) -> List[Project]:
        """
        Projects a user may see

        Managers see everything. Applicants and officers see visible projects
        open today offering at least one flat type they are eligible for;
        officers also always see the project they are assigned to.
        """
        filters = filters or ProjectFilter()
        projects = []

        for project in self.catalog.projects.list_all():
            if not filters.matches_neighborhood(project.neighborhood):
                continue

            offered = [ft for ft in project.inventory.flat_types if project.inventory.offers(ft)]
            if filters.flat_type is not None:
                offered = [ft for ft in offered if ft == filters.flat_type]

            match user:
                case Manager():
                    if filters.flat_type is not None and not offered:
                        continue
                case Officer(assigned_project=assigned) if assigned == project.name:
                    pass
                case Applicant() | Officer():
                    if not project.is_open_on(today):
                        continue
                    if not eligible_flat_types(user, offered):
                        continue

            projects.append(project)

        return self._sort(projects, filters.sort)

    @staticmethod
    def _sort(projects: List[Project], sort: ProjectSort) -> List[Project]:
        if sort == ProjectSort.NEIGHBORHOOD:
            return sorted(projects, key=lambda p: (p.neighborhood.lower(), p.name.lower()))
        if sort == ProjectSort.AVAILABLE_UNITS:
            return sorted(projects, key=lambda p: (-p.inventory.available_units(), p.name.lower()))
        return sorted(projects, key=lambda p: p.name.lower())
