"""
Tests for value objects and enums
"""
from datetime import date

import pytest

from bto_allocation.domain.enums import FlatType, ordered_flat_types
from bto_allocation.domain.value_objects import DateWindow, Nric


class TestNric:
    """NRIC format validation"""

    @pytest.mark.parametrize("value", ["S1234567A", "T7654321Z"])
    def test_valid(self, value):
        """Test well-formed NRICs are accepted"""
        assert Nric(value).value == value

    @pytest.mark.parametrize("value", ["", "A1234567B", "S123456A", "s1234567a", "S12345678A"])
    def test_invalid(self, value):
        """Test malformed NRICs are rejected"""
        assert not Nric.is_valid(value)
        with pytest.raises(ValueError):
            Nric(value)


class TestDateWindow:
    """Inclusive window arithmetic"""

    def test_rejects_close_before_open(self):
        """Test rejects close before open"""
        with pytest.raises(ValueError):
            DateWindow(date(2025, 2, 1), date(2025, 1, 31))

    def test_single_day_window(self):
        """Test single day window"""
        window = DateWindow(date(2025, 1, 1), date(2025, 1, 1))
        assert window.contains(date(2025, 1, 1))

    def test_touching_windows_overlap(self):
        """Test touching windows overlap"""
        first = DateWindow(date(2025, 1, 1), date(2025, 1, 31))
        second = DateWindow(date(2025, 1, 31), date(2025, 2, 28))
        assert first.overlaps(second)
        assert second.overlaps(first)

    def test_disjoint_windows(self):
        """Test disjoint windows"""
        first = DateWindow(date(2025, 1, 1), date(2025, 1, 30))
        second = DateWindow(date(2025, 1, 31), date(2025, 2, 28))
        assert not first.overlaps(second)

    def test_contains_bounds(self):
        """Test contains bounds"""
        window = DateWindow(date(2025, 1, 1), date(2025, 1, 31))
        assert window.contains(date(2025, 1, 31))
        assert not window.contains(date(2025, 2, 1))


class TestFlatType:
    """Flat type parsing and ordering"""

    @pytest.mark.parametrize("raw", ["TWO_ROOM", "2-room", " two room "])
    def test_parse_accepts_display_forms(self, raw):
        """Test parse accepts display forms"""
        assert FlatType.parse(raw) == FlatType.TWO_ROOM

    def test_parse_rejects_unknown(self):
        """Test parse rejects unknown"""
        with pytest.raises(ValueError):
            FlatType.parse("FIVE_ROOM")

    def test_smallest_and_order(self):
        """Test smallest and order"""
        assert FlatType.smallest() == FlatType.TWO_ROOM
        assert ordered_flat_types() == [FlatType.TWO_ROOM, FlatType.THREE_ROOM]
        assert FlatType.THREE_ROOM.display_name == "3-Room"
