"""
Tests for project administration and role-aware listings
"""
from datetime import date, timedelta

import pytest

from bto_allocation.core.exceptions import (
    AuthorizationException,
    ConflictException,
    DuplicateResourceException,
    ValidationException,
)
from bto_allocation.domain.enums import FlatType, ProjectSort

from conftest import TODAY, project_request


class TestCreateProject:
    """Manager project creation"""

    def test_creates_and_tracks_current_project(self, engine, manager):
        """Test creates and tracks current project"""
        result = engine.create_project(manager, project_request())
        assert result.ok
        project = result.value
        assert project.manager_nric == manager.nric
        assert project.max_officer_slots == 10
        assert manager.current_project == project.name
        assert manager.created_projects == [project.name]
        assert project.inventory.remaining(FlatType.THREE_ROOM) == 3

    def test_duplicate_name(self, engine, manager, other_manager, project):
        """Test duplicate name"""
        result = engine.create_project(other_manager, project_request(project.name))
        assert isinstance(result.error, DuplicateResourceException)

    def test_overlapping_window_for_same_manager(self, engine, manager, project):
        """Test overlapping window for same manager"""
        assert not engine.can_open_project(manager, TODAY, TODAY + timedelta(days=3))
        result = engine.create_project(manager, project_request("Birch Court"))
        assert isinstance(result.error, ConflictException)

    def test_later_window_allowed(self, engine, manager, project):
        """Test later window allowed"""
        later = project_request(
            "Birch Court",
            open_date=project.close_date + timedelta(days=1),
            close_date=project.close_date + timedelta(days=20),
        )
        assert engine.can_open_project(manager, later["open_date"], later["close_date"])
        assert engine.create_project(manager, later).ok
        assert manager.current_project == "Birch Court"

    @pytest.mark.parametrize("overrides", [
        {"close_date": TODAY - timedelta(days=30)},
        {"flat_units": {FlatType.TWO_ROOM: 0}},
        {"flat_units": {FlatType.TWO_ROOM: -1}},
        {"name": "   "},
        {"max_officer_slots": 11},
    ])
    def test_invalid_requests(self, engine, manager, overrides):
        """Test invalid requests"""
        result = engine.create_project(manager, project_request(**overrides))
        assert isinstance(result.error, ValidationException)
        assert manager.current_project is None

    def test_applicants_cannot_create(self, engine, married_applicant):
        """Test applicants cannot create"""
        result = engine.create_project(married_applicant, project_request())
        assert isinstance(result.error, AuthorizationException)


class TestEditProject:
    """Manager edits"""

    def test_toggle_visibility(self, engine, manager, project):
        """Test toggle visibility"""
        assert engine.toggle_visibility(manager, project.name).value.visible is False
        assert engine.toggle_visibility(manager, project.name).value.visible is True

    def test_other_manager_cannot_edit(self, engine, other_manager, project):
        """Test other manager cannot edit"""
        result = engine.toggle_visibility(other_manager, project.name)
        assert isinstance(result.error, AuthorizationException)
        assert project.visible

    def test_edit_fields(self, engine, manager, project):
        """Test edit fields"""
        result = engine.edit_project(manager, project.name, {
            "neighborhood": "Sembawang",
            "close_date": TODAY + timedelta(days=60),
            "flat_units": {FlatType.TWO_ROOM: 4, FlatType.THREE_ROOM: 3},
        })
        assert result.ok
        assert project.neighborhood == "Sembawang"
        assert project.close_date == TODAY + timedelta(days=60)
        assert project.inventory.total(FlatType.TWO_ROOM) == 4

    def test_edit_rejects_inverted_window(self, engine, manager, project):
        """Test edit rejects inverted window"""
        before = project.window
        result = engine.edit_project(manager, project.name, {"close_date": project.open_date - timedelta(days=1)})
        assert isinstance(result.error, ValidationException)
        assert project.window == before

    def test_cannot_shrink_below_booked(self, engine, married_applicant, approved_officer, manager, project):
        """Test cannot shrink below booked"""
        application = engine.apply(married_applicant, project.name, FlatType.TWO_ROOM).value
        engine.update_status(approved_officer, application.id, "SUCCESSFUL")
        engine.book(approved_officer, application.id)

        result = engine.edit_project(manager, project.name, {
            "flat_units": {FlatType.TWO_ROOM: 0, FlatType.THREE_ROOM: 3}
        })
        assert isinstance(result.error, ConflictException)
        assert project.inventory.total(FlatType.TWO_ROOM) == 2

    def test_slots_not_below_roster(self, engine, manager, approved_officer, second_officer, project):
        """Test slots not below roster"""
        engine.register_officer(second_officer, project.name)
        result = engine.edit_project(manager, project.name, {"max_officer_slots": 1})
        assert isinstance(result.error, ConflictException)
        assert project.max_officer_slots == 10


class TestDeleteProject:
    """Manager deletion"""

    def test_delete_clears_links(self, engine, catalog, manager, approved_officer, single_applicant, project):
        """Test delete clears links"""
        engine.create_enquiry(single_applicant, project.name, "Is there parking?")
        assert engine.delete_project(manager, project.name).ok

        assert not catalog.projects.exists(project.name)
        assert approved_officer.assigned_project is None
        assert catalog.enquiries.list_all() == []
        assert manager.current_project is None
        assert manager.created_projects == []

    def test_active_applications_block_delete(self, engine, catalog, manager, married_applicant, project):
        """Test active applications block delete"""
        engine.apply(married_applicant, project.name, FlatType.TWO_ROOM)
        result = engine.delete_project(manager, project.name)
        assert isinstance(result.error, ConflictException)
        assert catalog.projects.exists(project.name)


class TestListProjects:
    """What each role sees"""

    @pytest.fixture
    def projects(self, engine, manager, other_manager):
        engine.create_project(manager, project_request(
            "Acacia Breeze", neighborhood="Yishun",
            flat_units={FlatType.TWO_ROOM: 2, FlatType.THREE_ROOM: 3},
        ))
        engine.create_project(other_manager, project_request(
            "Birch Court", neighborhood="Bedok",
            flat_units={FlatType.TWO_ROOM: 0, FlatType.THREE_ROOM: 1},
        ))
        engine.create_project(manager, project_request(
            "Cedar Grove", neighborhood="Tampines", visible=False,
            open_date=TODAY + timedelta(days=31), close_date=TODAY + timedelta(days=60),
        ))

    def test_manager_sees_everything(self, engine, manager, projects):
        """Test manager sees everything"""
        names = [p.name for p in engine.list_projects(manager)]
        assert names == ["Acacia Breeze", "Birch Court", "Cedar Grove"]

    def test_married_sees_visible_open(self, engine, married_applicant, projects):
        """Test married sees visible open"""
        names = [p.name for p in engine.list_projects(married_applicant)]
        assert names == ["Acacia Breeze", "Birch Court"]

    def test_single_sees_two_room_projects_only(self, engine, single_applicant, young_single, projects):
        """Test single sees two room projects only"""
        assert [p.name for p in engine.list_projects(single_applicant)] == ["Acacia Breeze"]
        assert engine.list_projects(young_single) == []

    def test_officer_always_sees_assigned(self, engine, manager, second_officer, projects):
        """Test officer always sees assigned"""
        engine.register_officer(second_officer, "Cedar Grove")
        names = [p.name for p in engine.list_projects(second_officer)]
        assert "Cedar Grove" in names

    def test_filters_and_sorting(self, engine, manager, married_applicant, projects):
        """Test filters and sorting"""
        by_area = engine.list_projects(married_applicant, {"neighborhood": "bed"})
        assert [p.name for p in by_area] == ["Birch Court"]

        by_type = engine.list_projects(manager, {"flat_type": "TWO_ROOM"})
        assert [p.name for p in by_type] == ["Acacia Breeze", "Cedar Grove"]

        by_units = engine.list_projects(manager, {"sort": ProjectSort.AVAILABLE_UNITS})
        assert [p.name for p in by_units] == ["Acacia Breeze", "Cedar Grove", "Birch Court"]

    def test_closed_project_hidden_from_applicants(self, engine, other_manager, married_applicant):
        """Test closed project hidden from applicants"""
        engine.create_project(other_manager, project_request(
            "Old Estate", open_date=date(2024, 1, 1), close_date=date(2024, 2, 1)
        ))
        assert engine.list_projects(married_applicant) == []
