"""
Application Lifecycle Service
Creation, officer decisions and removal of BTO applications
"""
from datetime import datetime
from typing import List, Optional

from loguru import logger

from bto_allocation.core.exceptions import ConflictException, ResourceNotFoundException
from bto_allocation.domain.entities import (
    ApplicantCapable,
    Application,
    Project,
    as_applicant,
)
from bto_allocation.domain.enums import FlatType
from bto_allocation.domain.value_objects import ApplicationStatus
from bto_allocation.application.repositories import IApplicationRepository, IUserRepository


class ApplicationLifecycleService:
    """Application store: keeps applicants, projects and the arena in step"""

    def __init__(
        self,
        application_repository: IApplicationRepository,
        user_repository: IUserRepository
    ):
        self.application_repo = application_repository
        self.user_repo = user_repository

    def get(self, application_id: str) -> Application:
        application = self.application_repo.get_by_id(application_id)
        if application is None:
            raise ResourceNotFoundException("Application", application_id)
        return application

    def active_for(self, nric: str) -> Optional[Application]:
        """The applicant's current application, if any"""
        user = self.user_repo.get_by_nric(nric)
        applicant = as_applicant(user) if user is not None else None
        if applicant is not None and applicant.current_application_id:
            application = self.application_repo.get_by_id(applicant.current_application_id)
            if application is not None:
                return application
        return self.application_repo.get_active_for_applicant(nric)

    def list_for_project(self, project_name: str) -> List[Application]:
        return self.application_repo.list_for_project(project_name)

    def create(
        self,
        applicant: ApplicantCapable,
        project: Project,
        flat_type: FlatType,
        created_at: Optional[datetime] = None
    ) -> Application:
        """
        Open a PENDING application

        Raises:
            ConflictException: applicant already owns an active application
        """
        existing = self.active_for(applicant.nric)
        if existing is not None:
            raise ConflictException(
                f"Applicant {applicant.nric} already has an active application ({existing.id})"
            )

        application = Application(
            id=self.application_repo.next_id(),
            applicant_nric=applicant.nric,
            project_name=project.name,
            flat_type=flat_type,
        )
        if created_at is not None:
            application.created_at = created_at

        self.application_repo.add(application)
        applicant.current_application_id = application.id
        project.attach_application(application.id)

        logger.info(f"Application {application.id} created: {applicant.nric} -> {project.name} {flat_type.value}")
        return application

    def set_outcome(self, application: Application, status: ApplicationStatus) -> Application:
        """Officer decision: PENDING -> SUCCESSFUL | UNSUCCESSFUL"""
        previous = application.status
        application.set_outcome(status)
        logger.info(f"Application {application.id}: {previous.value} -> {application.status.value}")
        return application

    def remove(self, application: Application, project: Optional[Project]) -> None:
        """Drop an application from the active set and unlink it"""
        self.application_repo.remove(application.id)

        user = self.user_repo.get_by_nric(application.applicant_nric)
        applicant = as_applicant(user) if user is not None else None
        if applicant is not None and applicant.current_application_id == application.id:
            applicant.current_application_id = None

        if project is not None:
            project.detach_application(application.id)

        logger.info(f"Application {application.id} removed from the active set")
