"""
Enquiry Service
Create, edit, delete and reply to project enquiries
"""
from typing import List

from loguru import logger

from bto_allocation.core.exceptions import AuthorizationException, ResourceNotFoundException
from bto_allocation.domain.entities import Enquiry, Manager, Officer, Project, User
from bto_allocation.application.repositories import IEnquiryRepository, IProjectRepository


def can_reply(user: User, project_name: str) -> bool:
    """Managers reply anywhere; officers on the project they are assigned to, approved or not"""
    match user:
        case Manager():
            return True
        case Officer(assigned_project=assigned):
            return assigned == project_name
        case _:
            return False


class EnquiryService:
    """Enquiry store"""

    def __init__(
        self,
        enquiry_repository: IEnquiryRepository,
        project_repository: IProjectRepository
    ):
        self.enquiry_repo = enquiry_repository
        self.project_repo = project_repository

    def get(self, enquiry_id: str) -> Enquiry:
        enquiry = self.enquiry_repo.get_by_id(enquiry_id)
        if enquiry is None:
            raise ResourceNotFoundException("Enquiry", enquiry_id)
        return enquiry

    def list_for_project(self, project_name: str) -> List[Enquiry]:
        return self.enquiry_repo.list_for_project(project_name)

    def list_for_creator(self, nric: str) -> List[Enquiry]:
        return self.enquiry_repo.list_for_creator(nric)

    def create(self, creator: User, project: Project, content: str) -> Enquiry:
        enquiry = Enquiry(
            id=self.enquiry_repo.next_id(),
            creator_nric=creator.nric,
            project_name=project.name,
            content=content,
        )
        self.enquiry_repo.add(enquiry)
        project.attach_enquiry(enquiry.id)
        logger.info(f"Enquiry {enquiry.id} created by {creator.nric} on {project.name}")
        return enquiry

    def edit(self, user: User, enquiry_id: str, content: str) -> Enquiry:
        enquiry = self.get(enquiry_id)
        enquiry.edit(user.nric, content)
        logger.info(f"Enquiry {enquiry.id} edited by {user.nric}")
        return enquiry

    def delete(self, user: User, enquiry_id: str) -> Enquiry:
        enquiry = self.get(enquiry_id)
        enquiry.ensure_modifiable_by(user.nric, "delete")

        self.enquiry_repo.remove(enquiry.id)
        project = self.project_repo.get_by_name(enquiry.project_name)
        if project is not None:
            project.detach_enquiry(enquiry.id)

        logger.info(f"Enquiry {enquiry.id} deleted by {user.nric}")
        return enquiry

    def reply(self, user: User, enquiry_id: str, reply: str) -> Enquiry:
        enquiry = self.get(enquiry_id)
        if not can_reply(user, enquiry.project_name):
            raise AuthorizationException(
                f"User {user.nric} may not reply to enquiries on project {enquiry.project_name}"
            )
        enquiry.add_reply(reply, user.nric)
        logger.info(f"Enquiry {enquiry.id} replied by {user.nric}")
        return enquiry
