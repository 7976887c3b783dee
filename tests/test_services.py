"""
Tests for individual services with mocked repositories
"""
from datetime import date

import pytest
from unittest.mock import Mock

from bto_allocation.application.services import (
    ApplicationLifecycleService,
    InventoryService,
    OfficerAssignmentService,
)
from bto_allocation.core.exceptions import ConflictException, ResourceNotFoundException, ValidationException
from bto_allocation.domain.entities import Applicant, FlatInventory, Officer, Project
from bto_allocation.domain.enums import FlatType, MaritalStatus
from bto_allocation.domain.value_objects import DateWindow

from conftest import make_profile


def build_project(name="Acacia Breeze", start=date(2025, 1, 1), end=date(2025, 1, 31), **kwargs):
    return Project(
        name=name,
        neighborhood="Yishun",
        window=DateWindow(start, end),
        inventory=FlatInventory({FlatType.TWO_ROOM: 1, FlatType.THREE_ROOM: 1}),
        manager_nric="T8765432F",
        **kwargs,
    )


class TestInventoryService:
    """Unit movements and resizing"""

    @pytest.fixture
    def project(self):
        return build_project()

    @pytest.fixture
    def service(self, project):
        repo = Mock()
        repo.get_by_name.side_effect = lambda name: project if name == project.name else None
        return InventoryService(repo)

    def test_take_and_release(self, service, project):
        """Test take and release"""
        service.take_unit(project, FlatType.TWO_ROOM)
        assert service.remaining(project.name, FlatType.TWO_ROOM) == 0
        with pytest.raises(ConflictException):
            service.take_unit(project, FlatType.TWO_ROOM)
        service.release_unit(project, FlatType.TWO_ROOM)
        with pytest.raises(ConflictException):
            service.release_unit(project, FlatType.TWO_ROOM)

    def test_take_unknown_type(self, service):
        """Test take unknown type"""
        project = build_project()
        project.inventory = FlatInventory({FlatType.TWO_ROOM: 1})
        with pytest.raises(ValidationException):
            service.take_unit(project, FlatType.THREE_ROOM)

    def test_snapshot_unknown_project(self, service):
        """Test snapshot unknown project"""
        with pytest.raises(ResourceNotFoundException):
            service.snapshot("Nowhere")

    def test_resize_keeps_locked_types(self, service, project):
        """Test resize keeps locked types"""
        with pytest.raises(ConflictException):
            service.resize(project, {FlatType.TWO_ROOM: 4}, {FlatType.THREE_ROOM})
        service.resize(project, {FlatType.TWO_ROOM: 4}, set())
        assert project.inventory.total(FlatType.TWO_ROOM) == 4
        assert not project.inventory.offers(FlatType.THREE_ROOM)


class TestApplicationLifecycleService:
    """Application arena bookkeeping"""

    def test_active_for_falls_back_to_repository_scan(self):
        """Test active for falls back to repository scan"""
        applicant = Applicant(make_profile("S1234567A", 40, MaritalStatus.MARRIED))
        existing = Mock()
        application_repo = Mock()
        application_repo.get_active_for_applicant.return_value = existing
        user_repo = Mock()
        user_repo.get_by_nric.return_value = applicant

        service = ApplicationLifecycleService(application_repo, user_repo)
        assert service.active_for(applicant.nric) is existing
        application_repo.get_active_for_applicant.assert_called_once_with(applicant.nric)

    def test_create_refuses_second_application(self):
        """Test create refuses second application"""
        applicant = Applicant(make_profile("S1234567A", 40, MaritalStatus.MARRIED))
        application_repo = Mock()
        application_repo.get_active_for_applicant.return_value = Mock(id="abc")
        user_repo = Mock()
        user_repo.get_by_nric.return_value = applicant

        service = ApplicationLifecycleService(application_repo, user_repo)
        with pytest.raises(ConflictException):
            service.create(applicant, build_project(), FlatType.TWO_ROOM)
        application_repo.add.assert_not_called()


class TestOfficerAssignmentService:
    """Registration blockers"""

    @pytest.fixture
    def officer(self):
        return Officer(make_profile("T2109876H", 36, MaritalStatus.MARRIED))

    def service_for(self, projects, applications=()):
        project_repo = Mock()
        project_repo.list_all.return_value = projects
        application_repo = Mock()
        application_repo.list_for_project.return_value = list(applications)
        return OfficerAssignmentService(Mock(), project_repo, application_repo)

    def test_no_blockers_for_fresh_officer(self, officer):
        """Test no blockers for fresh officer"""
        candidate = build_project()
        assert self.service_for([candidate]).blockers(officer, candidate) == []

    def test_overlap_with_rostered_project(self, officer):
        """Test overlap with rostered project"""
        rostered = build_project("P1", officers=[officer.nric])
        candidate = build_project("P2", start=date(2025, 1, 15), end=date(2025, 2, 15))
        reasons = self.service_for([rostered, candidate]).blockers(officer, candidate)
        assert any("overlaps" in reason for reason in reasons)

    def test_existing_application_blocks(self, officer):
        """Test existing application blocks"""
        candidate = build_project()
        application = Mock(applicant_nric=officer.nric)
        service = self.service_for([candidate], [application])
        assert not service.can_register(officer, candidate)
