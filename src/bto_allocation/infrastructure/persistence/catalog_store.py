"""
SQL Catalog Store
Loads the in-memory catalog from the database and writes it back as a snapshot
"""
from datetime import datetime, timezone
from typing import Optional

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bto_allocation.core.database import session_scope
from bto_allocation.core.exceptions import RepositoryException
from bto_allocation.domain.entities import (
    Applicant,
    Application,
    Enquiry,
    FlatInventory,
    Manager,
    Officer,
    Profile,
    Project,
    User,
    build_user,
)
from bto_allocation.domain.enums import FlatType, UserRole
from bto_allocation.domain.value_objects import DateWindow
from bto_allocation.application.repositories import Catalog
from .models import (
    ApplicationModel,
    EnquiryModel,
    ProjectFlatModel,
    ProjectModel,
    ProjectOfficerModel,
    UserModel,
)
from .repositories import new_catalog


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored values are UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlCatalogStore:
    """
    Persists a whole Catalog through SQLAlchemy.

    The catalog stays the single in-memory source of truth; save() replaces
    every table's rows with the current state inside one transaction.
    """

    def __init__(self, session_factory: sessionmaker, enquiry_id_length: int = 8):
        self.session_factory = session_factory
        self.enquiry_id_length = enquiry_id_length

    # ------------------------------------------------------------------ load

    def load(self) -> Catalog:
        """
        Rebuild a catalog from the database

        Raises:
            RepositoryException: database unreadable or rows inconsistent
        """
        catalog = new_catalog(enquiry_id_length=self.enquiry_id_length)
        try:
            with session_scope(self.session_factory) as session:
                self._load_into(session, catalog)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load catalog: {e}")
            raise RepositoryException(f"Failed to load catalog: {e}")
        except ValueError as e:
            logger.error(f"Stored data is inconsistent: {e}")
            raise RepositoryException(f"Stored data is inconsistent: {e}")

        logger.info(
            f"Catalog loaded: {len(catalog.users.list_all())} users, "
            f"{len(catalog.projects.list_all())} projects, "
            f"{len(catalog.applications.list_all())} applications, "
            f"{len(catalog.enquiries.list_all())} enquiries"
        )
        return catalog

    def _load_into(self, session: Session, catalog: Catalog) -> None:
        for model in session.execute(select(UserModel).order_by(UserModel.nric)).scalars():
            catalog.users.add(self._user_to_entity(model))

        flats = {}
        for model in session.execute(select(ProjectFlatModel)).scalars():
            flats.setdefault(model.project_name, []).append(model)

        rosters = {}
        officer_rows = select(ProjectOfficerModel).order_by(
            ProjectOfficerModel.project_name, ProjectOfficerModel.position
        )
        for model in session.execute(officer_rows).scalars():
            rosters.setdefault(model.project_name, []).append(model.officer_nric)

        for model in session.execute(select(ProjectModel).order_by(ProjectModel.name)).scalars():
            project = self._project_to_entity(model, flats.get(model.name, []), rosters.get(model.name, []))
            catalog.projects.add(project)
            manager = catalog.users.get_by_nric(project.manager_nric)
            if isinstance(manager, Manager) and project.name not in manager.created_projects:
                manager.created_projects.append(project.name)

        application_rows = select(ApplicationModel).order_by(ApplicationModel.created_at)
        for model in session.execute(application_rows).scalars():
            application = self._application_to_entity(model)
            catalog.applications.add(application)
            project = catalog.projects.get_by_name(application.project_name)
            if project is not None:
                project.attach_application(application.id)
            applicant = catalog.users.get_by_nric(application.applicant_nric)
            if isinstance(applicant, (Applicant, Officer)):
                applicant.current_application_id = application.id

        enquiry_rows = select(EnquiryModel).order_by(EnquiryModel.created_at)
        for model in session.execute(enquiry_rows).scalars():
            enquiry = self._enquiry_to_entity(model)
            catalog.enquiries.add(enquiry)
            project = catalog.projects.get_by_name(enquiry.project_name)
            if project is not None:
                project.attach_enquiry(enquiry.id)

    # ------------------------------------------------------------------ save

    def save(self, catalog: Catalog) -> None:
        """
        Replace stored state with the catalog's current state

        Raises:
            RepositoryException: write failed; the transaction is rolled back
        """
        try:
            with session_scope(self.session_factory) as session:
                for model in (EnquiryModel, ApplicationModel, ProjectOfficerModel,
                              ProjectFlatModel, ProjectModel, UserModel):
                    session.execute(delete(model))

                session.add_all(self._user_to_model(user) for user in catalog.users.list_all())
                session.flush()

                for project in catalog.projects.list_all():
                    session.add(self._project_to_model(project))
                session.flush()

                for project in catalog.projects.list_all():
                    session.add_all(self._flats_to_models(project))
                    session.add_all(
                        ProjectOfficerModel(project_name=project.name, officer_nric=nric, position=position)
                        for position, nric in enumerate(project.officers)
                    )
                session.add_all(self._application_to_model(app) for app in catalog.applications.list_all())
                session.add_all(self._enquiry_to_model(enq) for enq in catalog.enquiries.list_all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to save catalog: {e}")
            raise RepositoryException(f"Failed to save catalog: {e}")

        logger.debug("Catalog saved")

    # --------------------------------------------------------------- mapping

    @staticmethod
    def _user_to_entity(model: UserModel) -> User:
        profile = Profile(
            nric=model.nric,
            password_hash=model.password_hash,
            age=model.age,
            marital_status=model.marital_status,
        )
        user = build_user(UserRole(model.role), profile)
        match user:
            case Manager():
                user.current_project = model.current_project
            case Officer():
                user.current_application_id = model.current_application_id
                user.assigned_project = model.assigned_project
                user.registration_approved = bool(model.registration_approved)
            case Applicant():
                user.current_application_id = model.current_application_id
        return user

    @staticmethod
    def _user_to_model(user: User) -> UserModel:
        model = UserModel(
            nric=user.nric,
            password_hash=user.password_hash,
            age=user.age,
            marital_status=user.marital_status.value,
            role=user.role.value,
            registration_approved=False,
        )
        match user:
            case Manager():
                model.current_project = user.current_project
            case Officer():
                model.current_application_id = user.current_application_id
                model.assigned_project = user.assigned_project
                model.registration_approved = user.registration_approved
            case Applicant():
                model.current_application_id = user.current_application_id
        return model

    @staticmethod
    def _project_to_entity(model: ProjectModel, flats, officers) -> Project:
        inventory = FlatInventory(
            {FlatType(flat.flat_type): flat.total_units for flat in flats},
            {FlatType(flat.flat_type): flat.remaining_units for flat in flats},
        )
        return Project(
            name=model.name,
            neighborhood=model.neighborhood,
            window=DateWindow(model.open_date, model.close_date),
            inventory=inventory,
            manager_nric=model.manager_nric,
            visible=bool(model.visible),
            max_officer_slots=model.max_officer_slots,
            officers=list(officers),
        )

    @staticmethod
    def _project_to_model(project: Project) -> ProjectModel:
        return ProjectModel(
            name=project.name,
            neighborhood=project.neighborhood,
            open_date=project.open_date,
            close_date=project.close_date,
            manager_nric=project.manager_nric,
            visible=project.visible,
            max_officer_slots=project.max_officer_slots,
        )

    @staticmethod
    def _flats_to_models(project: Project):
        return [
            ProjectFlatModel(
                project_name=project.name,
                flat_type=flat_type.value,
                total_units=project.inventory.total(flat_type),
                remaining_units=project.inventory.remaining(flat_type),
            )
            for flat_type in project.inventory.flat_types
        ]

    @staticmethod
    def _application_to_entity(model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            applicant_nric=model.applicant_nric,
            project_name=model.project_name,
            flat_type=FlatType(model.flat_type),
            status=model.status,
            withdrawal_requested=bool(model.withdrawal_requested),
            created_at=_aware(model.created_at),
            booked_at=_aware(model.booked_at),
            booked_by=model.booked_by,
        )

    @staticmethod
    def _application_to_model(application: Application) -> ApplicationModel:
        return ApplicationModel(
            id=application.id,
            applicant_nric=application.applicant_nric,
            project_name=application.project_name,
            flat_type=application.flat_type.value,
            status=application.status.value,
            withdrawal_requested=application.withdrawal_requested,
            created_at=application.created_at,
            booked_at=application.booked_at,
            booked_by=application.booked_by,
        )

    @staticmethod
    def _enquiry_to_entity(model: EnquiryModel) -> Enquiry:
        return Enquiry(
            id=model.id,
            creator_nric=model.creator_nric,
            project_name=model.project_name,
            content=model.content,
            created_at=_aware(model.created_at),
            reply=model.reply,
            replied_at=_aware(model.replied_at),
            replied_by=model.replied_by,
        )

    @staticmethod
    def _enquiry_to_model(enquiry: Enquiry) -> EnquiryModel:
        return EnquiryModel(
            id=enquiry.id,
            creator_nric=enquiry.creator_nric,
            project_name=enquiry.project_name,
            content=enquiry.content,
            created_at=enquiry.created_at,
            reply=enquiry.reply,
            replied_at=enquiry.replied_at,
            replied_by=enquiry.replied_by,
        )
