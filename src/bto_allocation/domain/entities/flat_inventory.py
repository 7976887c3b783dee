"""
Flat Inventory Domain Entity
Per-project total and remaining units by flat type
"""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from bto_allocation.core.exceptions import ConflictException, ValidationException

from ..enums import FlatType


@dataclass(frozen=True)
class UnitCount:
    """Immutable view of one flat type's units"""

    total: int
    remaining: int

    @property
    def booked(self) -> int:
        return self.total - self.remaining


class FlatInventory:
    """
    Bounded unit counts for one project.

    Invariant: both maps share the same flat types and
    0 <= remaining[t] <= total[t] for every type t.
    """

    def __init__(
        self,
        total: Mapping[FlatType, int],
        remaining: Optional[Mapping[FlatType, int]] = None
    ):
        totals = {FlatType(flat_type): count for flat_type, count in total.items()}
        for flat_type, count in totals.items():
            if not isinstance(count, int) or count < 0:
                raise ValueError(f"Unit count for {flat_type.value} must be a non-negative integer")

        if remaining is None:
            remainders = dict(totals)
        else:
            remainders = {FlatType(flat_type): count for flat_type, count in remaining.items()}
            if set(remainders) != set(totals):
                raise ValueError("Remaining units must cover exactly the flat types in total")
            for flat_type, count in remainders.items():
                if not 0 <= count <= totals[flat_type]:
                    raise ValueError(
                        f"Remaining {flat_type.value} units out of range: {count}/{totals[flat_type]}"
                    )

        self._total: Dict[FlatType, int] = totals
        self._remaining: Dict[FlatType, int] = remainders

    @property
    def flat_types(self) -> List[FlatType]:
        """Flat types known to the project, smallest first"""
        return sorted(self._total, key=lambda flat_type: flat_type.rooms)

    def offers(self, flat_type: FlatType) -> bool:
        """Whether the project sells this flat type at all"""
        return self._total.get(flat_type, 0) > 0

    def total(self, flat_type: FlatType) -> int:
        return self._total.get(flat_type, 0)

    def remaining(self, flat_type: FlatType) -> int:
        return self._remaining.get(flat_type, 0)

    def booked(self, flat_type: FlatType) -> int:
        return self.total(flat_type) - self.remaining(flat_type)

    def available_units(self) -> int:
        """Remaining units across every flat type"""
        return sum(self._remaining.values())

    def adjust(self, flat_type: FlatType, delta: int) -> bool:
        """
        Apply delta to remaining units.

        Booking applies -1, releasing a booked unit applies +1.
        Returns False without mutating when the type is unknown or
        the result would leave [0, total].
        """
        if flat_type not in self._total:
            return False

        updated = self._remaining[flat_type] + delta
        if updated < 0 or updated > self._total[flat_type]:
            return False

        self._remaining[flat_type] = updated
        return True

    def resize(self, new_totals: Mapping[FlatType, int]) -> None:
        """
        Replace total units, keeping booked units booked.

        Raises:
            ValidationException: negative counts
            ConflictException: a new total is below the booked count
        """
        totals = {FlatType(flat_type): count for flat_type, count in new_totals.items()}
        for flat_type, count in totals.items():
            if not isinstance(count, int) or count < 0:
                raise ValidationException("flat_units", f"{flat_type.value} must be a non-negative integer")

        for flat_type in self._total:
            booked = self.booked(flat_type)
            if totals.get(flat_type, 0) < booked:
                raise ConflictException(
                    f"{flat_type.value} has {booked} booked units; total cannot drop below that"
                )

        self._remaining = {
            flat_type: count - self.booked(flat_type)
            for flat_type, count in totals.items()
        }
        self._total = totals

    def snapshot(self) -> Dict[FlatType, UnitCount]:
        """Copy of the current counts"""
        return {
            flat_type: UnitCount(total=self._total[flat_type], remaining=self._remaining[flat_type])
            for flat_type in self.flat_types
        }

    def totals(self) -> Dict[FlatType, int]:
        return dict(self._total)

    def remainders(self) -> Dict[FlatType, int]:
        return dict(self._remaining)

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{flat_type.value}={self._remaining[flat_type]}/{self._total[flat_type]}"
            for flat_type in self.flat_types
        )
        return f"FlatInventory({counts})"
