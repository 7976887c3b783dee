"""
Tests for the age and marital-status eligibility policy
"""
import pytest

from bto_allocation.domain.entities import Applicant, Officer
from bto_allocation.domain.enums import FlatType, MaritalStatus
from bto_allocation.domain.policies import can_apply, eligible_flat_types

from conftest import make_profile


def applicant(age, marital_status):
    return Applicant(make_profile("S1234567A", age, marital_status))


class TestCanApply:
    """can_apply(profile, flat_type)"""

    @pytest.mark.parametrize("age,marital_status,flat_type,expected", [
        (20, MaritalStatus.MARRIED, FlatType.TWO_ROOM, False),
        (21, MaritalStatus.MARRIED, FlatType.TWO_ROOM, True),
        (21, MaritalStatus.MARRIED, FlatType.THREE_ROOM, True),
        (34, MaritalStatus.SINGLE, FlatType.TWO_ROOM, False),
        (35, MaritalStatus.SINGLE, FlatType.TWO_ROOM, True),
        (35, MaritalStatus.SINGLE, FlatType.THREE_ROOM, False),
        (60, MaritalStatus.SINGLE, FlatType.THREE_ROOM, False),
        (18, MaritalStatus.SINGLE, FlatType.TWO_ROOM, False),
    ])
    def test_policy_table(self, age, marital_status, flat_type, expected):
        """Test eligibility policy table"""
        assert can_apply(applicant(age, marital_status), flat_type) is expected

    def test_officers_follow_the_same_rules(self):
        """Test officers follow the same rules"""
        officer = Officer(make_profile("T2109876H", 36, MaritalStatus.SINGLE))
        assert can_apply(officer, FlatType.TWO_ROOM)
        assert not can_apply(officer, FlatType.THREE_ROOM)


class TestEligibleFlatTypes:
    """Subset filtering"""

    def test_married_gets_everything_offered(self):
        """Test married gets everything offered"""
        offered = [FlatType.TWO_ROOM, FlatType.THREE_ROOM]
        assert eligible_flat_types(applicant(30, MaritalStatus.MARRIED), offered) == offered

    def test_single_gets_two_room_only(self):
        """Test single gets two room only"""
        offered = [FlatType.TWO_ROOM, FlatType.THREE_ROOM]
        assert eligible_flat_types(applicant(40, MaritalStatus.SINGLE), offered) == [FlatType.TWO_ROOM]

    def test_single_with_three_room_only_project(self):
        """Test single with three room only project"""
        assert eligible_flat_types(applicant(40, MaritalStatus.SINGLE), [FlatType.THREE_ROOM]) == []
