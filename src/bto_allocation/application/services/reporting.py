"""
Reporting Service
Manager application reports and applicant booking receipts
"""
from typing import List, Optional

from loguru import logger

from bto_allocation.core.exceptions import ResourceNotFoundException, StateException
from bto_allocation.domain.entities import Application, as_applicant
from bto_allocation.application.repositories import Catalog
from bto_allocation.application.schemas import ApplicationReportRow, BookingReceipt, ReportFilter


class ReportService:
    """Read-only projections over the catalog"""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def _row(self, application: Application) -> Optional[ApplicationReportRow]:
        user = self.catalog.users.get_by_nric(application.applicant_nric)
        project = self.catalog.projects.get_by_name(application.project_name)
        if user is None or project is None:
            logger.warning(f"Skipping orphaned application {application.id} in report")
            return None

        return ApplicationReportRow(
            application_id=application.id,
            applicant_nric=user.nric,
            age=user.age,
            marital_status=user.marital_status,
            project_name=project.name,
            neighborhood=project.neighborhood,
            flat_type=application.flat_type,
            status=application.status,
            withdrawal_requested=application.withdrawal_requested,
        )

    def application_report(self, filters: Optional[ReportFilter] = None) -> List[ApplicationReportRow]:
        """
        Applications joined with applicant and project data

        Args:
            filters: Optional project, status, flat type, marital status
                and withdrawal-flag filters

        Returns:
            Rows ordered by project name then application creation time
        """
        filters = filters or ReportFilter()
        applications = sorted(
            self.catalog.applications.list_all(),
            key=lambda app: (app.project_name, app.created_at),
        )

        rows = []
        for application in applications:
            if filters.project_name and application.project_name != filters.project_name:
                continue
            if filters.status and application.status != filters.status:
                continue
            if filters.flat_type and application.flat_type != filters.flat_type:
                continue
            if filters.withdrawal_requested is not None and \
                    application.withdrawal_requested != filters.withdrawal_requested:
                continue

            row = self._row(application)
            if row is None:
                continue
            if filters.marital_status and row.marital_status != filters.marital_status:
                continue
            rows.append(row)

        logger.debug(f"Application report: {len(rows)} rows for {filters.model_dump(exclude_none=True)}")
        return rows

    def receipt(self, application_id: str) -> BookingReceipt:
        """Receipt for a booked application"""
        application = self.catalog.applications.get_by_id(application_id)
        if application is None:
            raise ResourceNotFoundException("Application", application_id)
        if not application.is_booked():
            raise StateException("application", application.status.value, "issue a receipt for")

        row = self._row(application)
        if row is None:
            raise ResourceNotFoundException("Applicant or project", application_id)

        return BookingReceipt(
            application_id=application.id,
            applicant_nric=row.applicant_nric,
            age=row.age,
            marital_status=row.marital_status,
            project_name=row.project_name,
            neighborhood=row.neighborhood,
            flat_type=application.flat_type,
            booked_at=application.booked_at or application.created_at,
            booked_by=application.booked_by,
        )

    def receipt_for_applicant(self, nric: str) -> BookingReceipt:
        user = self.catalog.users.get_by_nric(nric)
        applicant = as_applicant(user) if user is not None else None
        if applicant is None or not applicant.current_application_id:
            raise ResourceNotFoundException("Booked application", nric)
        return self.receipt(applicant.current_application_id)
