"""Pure allocation rules"""

from .eligibility import can_apply, eligible_flat_types
from .officer_assignment import registration_blockers, can_open_project
__all__ = [
    "can_apply",
    "eligible_flat_types",
    "registration_blockers",
    "can_open_project",
]
