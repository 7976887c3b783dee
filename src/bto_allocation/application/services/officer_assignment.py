"""
Officer Assignment Service
Officer registration on project rosters and manager approval
"""
from typing import List, Optional

from loguru import logger

from bto_allocation.core.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    StateException,
)
from bto_allocation.domain.entities import Manager, Officer, Project
from bto_allocation.domain.policies import registration_blockers
from bto_allocation.domain.value_objects import RegistrationStatus
from bto_allocation.application.repositories import (
    IApplicationRepository,
    IProjectRepository,
    IUserRepository,
)


class OfficerAssignmentService:
    """Registers officers on projects subject to slot and overlap rules"""

    def __init__(
        self,
        user_repository: IUserRepository,
        project_repository: IProjectRepository,
        application_repository: IApplicationRepository
    ):
        self.user_repo = user_repository
        self.project_repo = project_repository
        self.application_repo = application_repository

    def rostered_projects(self, officer: Officer) -> List[Project]:
        """Projects whose roster lists the officer, pending or approved"""
        return [project for project in self.project_repo.list_all() if project.has_officer(officer.nric)]

    def _has_application_on(self, officer: Officer, project: Project) -> bool:
        return any(
            app.applicant_nric == officer.nric
            for app in self.application_repo.list_for_project(project.name)
        )

    def blockers(self, officer: Officer, project: Project) -> List[str]:
        return registration_blockers(
            officer,
            project,
            self.rostered_projects(officer),
            self._has_application_on(officer, project),
        )

    def can_register(self, officer: Officer, project: Project) -> bool:
        return not self.blockers(officer, project)

    def register(self, officer: Officer, project: Project) -> Project:
        """
        Join a project roster pending manager approval

        Raises:
            ConflictException: rule violation or roster full
        """
        reasons = self.blockers(officer, project)
        if reasons:
            logger.warning(f"Officer {officer.nric} cannot register for {project.name}: {'; '.join(reasons)}")
            raise ConflictException(f"Officer {officer.nric} cannot register: {'; '.join(reasons)}")

        if not project.add_officer(officer.nric):
            logger.warning(f"Officer roster full for {project.name} ({project.max_officer_slots} slots)")
            raise ConflictException(f"No officer slots left on project {project.name}")

        officer.assign(project.name)
        logger.info(
            f"Officer {officer.nric} registered for {project.name} "
            f"({project.remaining_officer_slots} slots left)"
        )
        return project

    def _ensure_pending_on(self, manager: Manager, officer: Officer, project: Project) -> None:
        if project.manager_nric != manager.nric:
            raise AuthorizationException(f"Manager {manager.nric} does not manage project {project.name}")
        if not project.has_officer(officer.nric) or officer.assigned_project != project.name:
            raise ResourceNotFoundException("Officer registration", f"{officer.nric}@{project.name}")
        if officer.registration_approved:
            raise StateException("officer registration", RegistrationStatus.APPROVED.value, "decide on")

    def approve(self, manager: Manager, officer: Officer, project: Project) -> Officer:
        """Approve a pending registration"""
        self._ensure_pending_on(manager, officer, project)

        for other in self.rostered_projects(officer):
            if other.name != project.name and other.overlaps(project):
                raise ConflictException(
                    f"Officer {officer.nric} is also rostered on overlapping project {other.name}"
                )

        officer.registration_approved = True
        logger.info(f"Officer {officer.nric} approved for {project.name} by {manager.nric}")
        return officer

    def reject(self, manager: Manager, officer: Officer, project: Project) -> Officer:
        """Reject a pending registration and free the slot"""
        self._ensure_pending_on(manager, officer, project)
        project.remove_officer(officer.nric)
        officer.clear_assignment()
        logger.info(f"Officer {officer.nric} rejected for {project.name} by {manager.nric}")
        return officer

    def pending_registrations(self, project: Project) -> List[Officer]:
        """Officers on the roster still awaiting approval"""
        pending = []
        for nric in project.officers:
            user = self.user_repo.get_by_nric(nric)
            if isinstance(user, Officer) and not user.registration_approved:
                pending.append(user)
        return pending

    def registration_status(self, officer: Officer) -> Optional[RegistrationStatus]:
        """None when the officer is not on any roster"""
        if officer.assigned_project is None:
            return None
        return RegistrationStatus.APPROVED if officer.registration_approved else RegistrationStatus.PENDING
