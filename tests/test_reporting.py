"""
Tests for the application report and booking receipts
"""
from datetime import datetime, timezone

import pytest

from bto_allocation.core.exceptions import AuthorizationException, ResourceNotFoundException, StateException
from bto_allocation.domain.enums import FlatType, MaritalStatus
from bto_allocation.domain.value_objects import ApplicationStatus


@pytest.fixture
def applications(engine, single_applicant, married_applicant, approved_officer, project):
    single = engine.apply(single_applicant, project.name, FlatType.TWO_ROOM).value
    single.created_at = datetime(2025, 5, 1, tzinfo=timezone.utc)
    married = engine.apply(married_applicant, project.name, FlatType.THREE_ROOM).value
    married.created_at = datetime(2025, 5, 2, tzinfo=timezone.utc)

    engine.update_status(approved_officer, married.id, ApplicationStatus.SUCCESSFUL)
    engine.book(approved_officer, married.id)
    return single, married


class TestApplicationReport:
    """Manager report rows and filters"""

    def test_all_rows_in_creation_order(self, engine, applications):
        """Test all rows in creation order"""
        rows = engine.application_report()
        assert [row.application_id for row in rows] == [app.id for app in applications]
        assert rows[0].neighborhood == "Yishun"
        assert rows[1].status == ApplicationStatus.BOOKED

    def test_filters(self, engine, applications):
        """Test report filters narrow the rows"""
        single, married = applications
        assert [r.application_id for r in engine.application_report({"marital_status": "MARRIED"})] == [married.id]
        assert [r.application_id for r in engine.application_report({"flat_type": "TWO_ROOM"})] == [single.id]
        assert engine.application_report({"project_name": "Nowhere"}) == []

    def test_withdrawal_flag_filter(self, engine, single_applicant, applications):
        """Test withdrawal flag filter"""
        single, _ = applications
        engine.request_withdrawal(single_applicant, single.id)
        rows = engine.application_report({"withdrawal_requested": True})
        assert [row.application_id for row in rows] == [single.id]
        assert rows[0].marital_status == MaritalStatus.SINGLE


class TestReceipts:
    """Booking receipts"""

    def test_applicant_receipt(self, engine, married_applicant, approved_officer, applications):
        """Test applicant receipt"""
        _, married = applications
        result = engine.generate_receipt(married_applicant)
        assert result.ok
        receipt = result.value
        assert receipt.application_id == married.id
        assert receipt.flat_type == FlatType.THREE_ROOM
        assert receipt.age == 40
        assert receipt.booked_by == approved_officer.nric
        assert result.persisted is None

    def test_officer_receipt_for_booking(self, engine, approved_officer, applications):
        """Test officer receipt for booking"""
        _, married = applications
        assert engine.generate_receipt(approved_officer, married.id).ok

    def test_no_receipt_before_booking(self, engine, single_applicant, applications):
        """Test no receipt before booking"""
        single, _ = applications
        result = engine.generate_receipt(single_applicant, single.id)
        assert isinstance(result.error, StateException)

    def test_stranger_cannot_read_receipt(self, engine, young_single, applications):
        """Test stranger cannot read receipt"""
        _, married = applications
        result = engine.generate_receipt(young_single, married.id)
        assert isinstance(result.error, AuthorizationException)

    def test_no_application(self, engine, young_single):
        """Test receipt without an application fails"""
        result = engine.generate_receipt(young_single)
        assert isinstance(result.error, ResourceNotFoundException)
