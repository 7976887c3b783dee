"""
Allocation Engine
Composition root answering "can X apply / book / withdraw" and running every command
"""
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from bto_allocation.core.config import Settings, settings as default_settings
from bto_allocation.core.exceptions import (
    AuthorizationException,
    ConflictException,
    DomainException,
    RepositoryException,
    ValidationException,
)
from bto_allocation.domain.entities import (
    Applicant,
    ApplicantCapable,
    Application,
    Enquiry,
    Manager,
    Officer,
    Project,
    UnitCount,
    User,
    as_applicant,
    manages_applications_for,
)
from bto_allocation.domain.enums import FlatType
from bto_allocation.domain.policies import can_apply, can_open_project
from bto_allocation.domain.value_objects import ApplicationStatus, DateWindow, RegistrationStatus
from bto_allocation.application.repositories import Catalog
from bto_allocation.application.results import CommandResult
from bto_allocation.application.schemas import (
    ApplicationReportRow,
    BookingReceipt,
    ProjectCreateRequest,
    ProjectFilter,
    ProjectUpdateRequest,
    ReportFilter,
)
from .enquiry import EnquiryService
from .inventory import InventoryService
from .lifecycle import ApplicationLifecycleService
from .officer_assignment import OfficerAssignmentService
from .project import ProjectService
from .reporting import ReportService


M = TypeVar("M", bound=BaseModel)
FlushHook = Callable[[Catalog], None]


def _parse_flat_type(value: Union[FlatType, str]) -> FlatType:
    if isinstance(value, FlatType):
        return value
    try:
        return FlatType.parse(value)
    except (ValueError, AttributeError):
        raise ValidationException("flat_type", f"Unknown flat type: {value}")


def _coerce(model: Type[M], data: Union[M, Mapping[str, Any]]) -> M:
    """Build a request schema, surfacing pydantic errors as ValidationException"""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or model.__name__
        raise ValidationException(field, first.get("msg", "invalid value"))


class AllocationEngine:
    """
    Orchestrates eligibility, inventory, lifecycle, officer and enquiry rules.

    Every command returns a CommandResult and never raises domain errors;
    all guards run before the first mutation so a failed command changes
    nothing. After a successful mutating command the optional flush hook
    receives the catalog; a failed flush is logged and reported on the
    result without touching in-memory state.
    """

    def __init__(
        self,
        catalog: Catalog,
        inventory: InventoryService,
        lifecycle: ApplicationLifecycleService,
        officers: OfficerAssignmentService,
        enquiries: EnquiryService,
        projects: ProjectService,
        reports: ReportService,
        clock: Callable[[], date] = date.today,
        flush_hook: Optional[FlushHook] = None
    ):
        self.catalog = catalog
        self.inventory = inventory
        self.lifecycle = lifecycle
        self.officers = officers
        self.enquiries = enquiries
        self.projects = projects
        self.reports = reports
        self.clock = clock
        self.flush_hook = flush_hook

    @classmethod
    def from_catalog(
        cls,
        catalog: Catalog,
        config: Optional[Settings] = None,
        clock: Callable[[], date] = date.today,
        flush_hook: Optional[FlushHook] = None
    ) -> "AllocationEngine":
        """Wire every service over one catalog"""
        config = config or default_settings
        inventory = InventoryService(catalog.projects)
        return cls(
            catalog=catalog,
            inventory=inventory,
            lifecycle=ApplicationLifecycleService(catalog.applications, catalog.users),
            officers=OfficerAssignmentService(catalog.users, catalog.projects, catalog.applications),
            enquiries=EnquiryService(catalog.enquiries, catalog.projects),
            projects=ProjectService(catalog, inventory, config.DEFAULT_MAX_OFFICER_SLOTS),
            reports=ReportService(catalog),
            clock=clock,
            flush_hook=flush_hook,
        )

    # ------------------------------------------------------------------
    # Command plumbing
    # ------------------------------------------------------------------

    def _execute(self, command: str, action: Callable[[], Any], mutating: bool = True) -> CommandResult:
        try:
            value = action()
        except DomainException as exc:
            logger.warning(f"{command} rejected ({type(exc).__name__}): {exc}")
            return CommandResult.failure(exc)

        persisted = self._flush(command) if mutating else None
        return CommandResult.success(value, persisted=persisted)

    def _flush(self, command: str) -> Optional[bool]:
        if self.flush_hook is None:
            return None
        try:
            self.flush_hook(self.catalog)
            return True
        except RepositoryException as exc:
            logger.error(f"Flush after {command} failed; in-memory state kept: {exc}")
            return False

    @staticmethod
    def _check(check: Callable[[], Any]) -> bool:
        try:
            check()
            return True
        except DomainException:
            return False

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    # ------------------------------------------------------------------
    # Role capabilities
    # ------------------------------------------------------------------

    @staticmethod
    def _require_applicant(user: User) -> ApplicantCapable:
        applicant = as_applicant(user)
        if applicant is None:
            raise AuthorizationException(f"{user.role.value} {user.nric} cannot act as an applicant")
        return applicant

    @staticmethod
    def _require_manager(user: User) -> Manager:
        match user:
            case Manager():
                return user
            case _:
                raise AuthorizationException(f"{user.role.value} {user.nric} is not an HDB manager")

    @staticmethod
    def _require_officer_for(user: User, project: Project) -> Officer:
        """Approved officer of this project"""
        match user:
            case Officer() if manages_applications_for(user, project.name):
                return user
            case Officer():
                raise AuthorizationException(
                    f"Officer {user.nric} is not an approved officer of project {project.name}"
                )
            case _:
                raise AuthorizationException(f"{user.role.value} {user.nric} is not an HDB officer")

    @staticmethod
    def _require_processor(user: User, project: Project) -> User:
        """Approved officer of the project, or the manager who owns it"""
        match user:
            case Manager(nric=nric) if nric == project.manager_nric:
                return user
            case Officer() if manages_applications_for(user, project.name):
                return user
            case _:
                raise AuthorizationException(
                    f"{user.role.value} {user.nric} cannot process applications for {project.name}"
                )

    def _officer(self, nric: str) -> Officer:
        user = self.catalog.users.get_by_nric(nric)
        match user:
            case Officer():
                return user
            case None:
                raise ValidationException("officer_nric", f"No user with NRIC {nric}")
            case _:
                raise ValidationException("officer_nric", f"{nric} is not an HDB officer")

    def _application_and_project(self, application_id: str) -> Tuple[Application, Project]:
        application = self.lifecycle.get(application_id)
        project = self.projects.get(application.project_name)
        return application, project

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @staticmethod
    def is_eligible(user: User, flat_type: Union[FlatType, str]) -> bool:
        """Pure eligibility; independent of inventory and project state"""
        applicant = as_applicant(user)
        if applicant is None:
            return False
        try:
            return can_apply(applicant, _parse_flat_type(flat_type))
        except ValidationException:
            return False

    def _check_apply(
        self,
        user: User,
        project_name: str,
        flat_type: Union[FlatType, str]
    ) -> Tuple[ApplicantCapable, Project, FlatType]:
        applicant = self._require_applicant(user)
        project = self.projects.get(project_name)
        chosen = _parse_flat_type(flat_type)

        existing = self.lifecycle.active_for(applicant.nric)
        if existing is not None:
            raise ConflictException(
                f"Applicant {applicant.nric} already has an active application ({existing.id})"
            )
        if not can_apply(applicant, chosen):
            raise ValidationException(
                "flat_type",
                f"Applicant aged {applicant.age} ({applicant.marital_status.value}) "
                f"is not eligible for {chosen.display_name}"
            )
        if not project.inventory.offers(chosen):
            raise ValidationException("flat_type", f"{project.name} does not offer {chosen.display_name} flats")
        if not project.is_open_on(self.clock()):
            raise ValidationException("project", f"{project.name} is not open for applications")
        if isinstance(applicant, Officer) and applicant.assigned_project == project.name:
            raise ConflictException(f"Officer {applicant.nric} handles {project.name} and cannot apply to it")

        return applicant, project, chosen

    def can_apply(self, user: User, project_name: str, flat_type: Union[FlatType, str]) -> bool:
        return self._check(lambda: self._check_apply(user, project_name, flat_type))

    def can_book(self, application_id: str) -> bool:
        """Application state allows booking and a unit is left"""
        def check():
            application, project = self._application_and_project(application_id)
            application.ensure_bookable()
            if project.inventory.remaining(application.flat_type) <= 0:
                raise ConflictException("No units left")
        return self._check(check)

    def can_withdraw(self, application_id: str) -> bool:
        """A withdrawal request would be accepted"""
        def check():
            application = self.lifecycle.get(application_id)
            if application.is_booked():
                raise ConflictException("Booked applications cannot request withdrawal")
        return self._check(check)

    def can_register(self, officer: User, project_name: str) -> bool:
        match officer:
            case Officer():
                return self._check(lambda: self._check_register(officer, project_name))
            case _:
                return False

    def _check_register(self, officer: Officer, project_name: str) -> Project:
        project = self.projects.get(project_name)
        reasons = self.officers.blockers(officer, project)
        if reasons:
            raise ConflictException("; ".join(reasons))
        return project

    def can_open_project(self, manager: User, open_date: date, close_date: date) -> bool:
        """Creation-time overlap rule against the manager's current project"""
        match manager:
            case Manager():
                if close_date < open_date:
                    return False
                return can_open_project(
                    self.projects.current_project_of(manager),
                    DateWindow(open_date, close_date),
                )
            case _:
                return False

    # ------------------------------------------------------------------
    # Application commands
    # ------------------------------------------------------------------

    def apply(self, user: User, project_name: str, flat_type: Union[FlatType, str]) -> CommandResult[Application]:
        """Open a PENDING application for one flat type of one project"""
        def action():
            applicant, project, chosen = self._check_apply(user, project_name, flat_type)
            return self.lifecycle.create(applicant, project, chosen)
        return self._execute("apply", action)

    def update_status(
        self,
        officer: User,
        application_id: str,
        status: Union[ApplicationStatus, str]
    ) -> CommandResult[Application]:
        """Officer marks a pending application SUCCESSFUL or UNSUCCESSFUL"""
        def action():
            application, project = self._application_and_project(application_id)
            self._require_officer_for(officer, project)
            try:
                new_status = ApplicationStatus(status)
            except ValueError:
                raise ValidationException("status", f"Unknown status: {status}")
            return self.lifecycle.set_outcome(application, new_status)
        return self._execute("update_status", action)

    def request_withdrawal(self, user: User, application_id: str) -> CommandResult[Application]:
        """Applicant flags their application for withdrawal"""
        def action():
            application = self.lifecycle.get(application_id)
            if user.nric != application.applicant_nric:
                raise AuthorizationException(f"Application {application.id} does not belong to {user.nric}")
            application.request_withdrawal()
            logger.info(f"Withdrawal requested for application {application.id}")
            return application
        return self._execute("request_withdrawal", action)

    def approve_withdrawal(self, user: User, application_id: str) -> CommandResult[Application]:
        """Remove a flagged application, releasing its unit if it was booked"""
        def action():
            application, project = self._application_and_project(application_id)
            self._require_processor(user, project)
            application.ensure_withdrawal_requested()
            if application.is_booked():
                self.inventory.release_unit(project, application.flat_type)
            self.lifecycle.remove(application, project)
            logger.info(f"Withdrawal of application {application.id} approved by {user.nric}")
            return application
        return self._execute("approve_withdrawal", action)

    def reject_withdrawal(self, user: User, application_id: str) -> CommandResult[Application]:
        """Clear a withdrawal request"""
        def action():
            application, project = self._application_and_project(application_id)
            self._require_processor(user, project)
            application.reject_withdrawal()
            logger.info(f"Withdrawal of application {application.id} rejected by {user.nric}")
            return application
        return self._execute("reject_withdrawal", action)

    def book(
        self,
        officer: User,
        application_id: str,
        flat_type: Optional[Union[FlatType, str]] = None
    ) -> CommandResult[Application]:
        """
        Officer books the applied flat type for a successful application.

        Status and inventory change together: every guard runs before the
        unit is taken, and marking the booking cannot fail afterwards.
        """
        def action():
            application, project = self._application_and_project(application_id)
            handler = self._require_officer_for(officer, project)

            chosen = application.flat_type if flat_type is None else _parse_flat_type(flat_type)
            if chosen != application.flat_type:
                raise ValidationException(
                    "flat_type",
                    f"Application {application.id} is for {application.flat_type.display_name}, "
                    f"not {chosen.display_name}"
                )

            application.ensure_bookable()
            self.inventory.take_unit(project, chosen)
            application.mark_booked(handler.nric, self._now())
            logger.info(f"Application {application.id} booked {chosen.value} in {project.name} by {handler.nric}")
            return application
        return self._execute("book", action)

    def generate_receipt(self, user: User, application_id: Optional[str] = None) -> CommandResult[BookingReceipt]:
        """Receipt for the user's own booking, or any booking the user processes"""
        def action():
            if application_id is None:
                return self.reports.receipt_for_applicant(user.nric)
            application, project = self._application_and_project(application_id)
            if user.nric != application.applicant_nric:
                self._require_processor(user, project)
            return self.reports.receipt(application.id)
        return self._execute("generate_receipt", action, mutating=False)

    # ------------------------------------------------------------------
    # Officer registration commands
    # ------------------------------------------------------------------

    def register_officer(self, officer: User, project_name: str) -> CommandResult[Project]:
        """Officer joins a project roster pending approval"""
        def action():
            match officer:
                case Officer():
                    project = self.projects.get(project_name)
                    return self.officers.register(officer, project)
                case _:
                    raise AuthorizationException(f"{officer.role.value} {officer.nric} is not an HDB officer")
        return self._execute("register_officer", action)

    def approve_officer(self, manager: User, officer_nric: str, project_name: str) -> CommandResult[Officer]:
        def action():
            owner = self._require_manager(manager)
            project = self.projects.get(project_name)
            return self.officers.approve(owner, self._officer(officer_nric), project)
        return self._execute("approve_officer", action)

    def reject_officer(self, manager: User, officer_nric: str, project_name: str) -> CommandResult[Officer]:
        def action():
            owner = self._require_manager(manager)
            project = self.projects.get(project_name)
            return self.officers.reject(owner, self._officer(officer_nric), project)
        return self._execute("reject_officer", action)

    # ------------------------------------------------------------------
    # Enquiry commands
    # ------------------------------------------------------------------

    def create_enquiry(self, user: User, project_name: str, content: str) -> CommandResult[Enquiry]:
        def action():
            project = self.projects.get(project_name)
            return self.enquiries.create(user, project, content)
        return self._execute("create_enquiry", action)

    def edit_enquiry(self, user: User, enquiry_id: str, content: str) -> CommandResult[Enquiry]:
        return self._execute("edit_enquiry", lambda: self.enquiries.edit(user, enquiry_id, content))

    def delete_enquiry(self, user: User, enquiry_id: str) -> CommandResult[Enquiry]:
        return self._execute("delete_enquiry", lambda: self.enquiries.delete(user, enquiry_id))

    def reply_enquiry(self, user: User, enquiry_id: str, reply: str) -> CommandResult[Enquiry]:
        return self._execute("reply_enquiry", lambda: self.enquiries.reply(user, enquiry_id, reply))

    # ------------------------------------------------------------------
    # Project commands
    # ------------------------------------------------------------------

    def create_project(
        self,
        manager: User,
        request: Union[ProjectCreateRequest, Mapping[str, Any]]
    ) -> CommandResult[Project]:
        def action():
            owner = self._require_manager(manager)
            return self.projects.create(owner, _coerce(ProjectCreateRequest, request))
        return self._execute("create_project", action)

    def toggle_visibility(self, manager: User, project_name: str) -> CommandResult[Project]:
        def action():
            owner = self._require_manager(manager)
            return self.projects.toggle_visibility(owner, self.projects.get(project_name))
        return self._execute("toggle_visibility", action)

    def edit_project(
        self,
        manager: User,
        project_name: str,
        request: Union[ProjectUpdateRequest, Mapping[str, Any]]
    ) -> CommandResult[Project]:
        def action():
            owner = self._require_manager(manager)
            return self.projects.edit(owner, self.projects.get(project_name), _coerce(ProjectUpdateRequest, request))
        return self._execute("edit_project", action)

    def delete_project(self, manager: User, project_name: str) -> CommandResult[Project]:
        def action():
            owner = self._require_manager(manager)
            return self.projects.delete(owner, self.projects.get(project_name))
        return self._execute("delete_project", action)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_projects(
        self,
        user: User,
        filters: Optional[Union[ProjectFilter, Mapping[str, Any]]] = None
    ) -> List[Project]:
        """Projects visible or eligible to the user"""
        parsed = _coerce(ProjectFilter, filters) if filters is not None else None
        return self.projects.list_for(user, self.clock(), parsed)

    def active_application(self, user: User) -> Optional[Application]:
        match user:
            case Applicant() | Officer():
                return self.lifecycle.active_for(user.nric)
            case _:
                return None

    def project_applications(self, project_name: str) -> List[Application]:
        return self.lifecycle.list_for_project(project_name)

    def project_enquiries(self, project_name: str) -> List[Enquiry]:
        return self.enquiries.list_for_project(project_name)

    def user_enquiries(self, user: User) -> List[Enquiry]:
        return self.enquiries.list_for_creator(user.nric)

    def remaining_units(self, project_name: str) -> Dict[FlatType, UnitCount]:
        return self.inventory.snapshot(project_name)

    def pending_officers(self, project_name: str) -> List[Officer]:
        return self.officers.pending_registrations(self.projects.get(project_name))

    def registration_status(self, user: User) -> Optional[RegistrationStatus]:
        match user:
            case Officer():
                return self.officers.registration_status(user)
            case _:
                return None

    def application_report(
        self,
        filters: Optional[Union[ReportFilter, Mapping[str, Any]]] = None
    ) -> List[ApplicationReportRow]:
        parsed = _coerce(ReportFilter, filters) if filters is not None else None
        return self.reports.application_report(parsed)
