"""
Eligibility Rules
Which flat types an applicant profile may apply for
"""
from typing import Iterable, List, Protocol

from ..enums import FlatType, MaritalStatus


MIN_APPLICANT_AGE = 21
MIN_SINGLE_APPLICANT_AGE = 35


class EligibilityProfile(Protocol):
    age: int
    marital_status: MaritalStatus


def can_apply(profile: EligibilityProfile, flat_type: FlatType) -> bool:
    """
    Age and marital-status policy.
    
    Under 21: nothing. Singles 35 and over: the smallest flat type only.
    Singles 21 to 34: nothing. Married 21 and over: everything.
    """
    if profile.age < MIN_APPLICANT_AGE:
        return False
    
    if profile.marital_status == MaritalStatus.SINGLE:
        return profile.age >= MIN_SINGLE_APPLICANT_AGE and flat_type == FlatType.smallest()
    
    return profile.marital_status == MaritalStatus.MARRIED


def eligible_flat_types(profile: EligibilityProfile, flat_types: Iterable[FlatType]) -> List[FlatType]:
    """Subset of flat_types the profile may apply for"""
    return [flat_type for flat_type in flat_types if can_apply(profile, flat_type)]
