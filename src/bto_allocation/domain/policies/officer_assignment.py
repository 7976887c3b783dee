"""
Officer Assignment Rules
Which projects an officer may register for, and manager overlap
"""
from typing import Iterable, List, Optional

from ..entities import Officer, Project
from ..value_objects import DateWindow


def registration_blockers(
    officer: Officer,
    candidate: Project,
    rostered_projects: Iterable[Project],
    has_application_on_candidate: bool
) -> List[str]:
    """
    Reasons the officer may not register for candidate; empty when allowed
    
    Args:
        officer: Registering officer
        candidate: Project to register for
        rostered_projects: Projects whose roster already lists the officer
        has_application_on_candidate: Officer has applied to candidate as an applicant
    """
    reasons = []
    
    if officer.assigned_project is not None:
        reasons.append(f"already assigned to project {officer.assigned_project}")
    
    if has_application_on_candidate:
        reasons.append(f"has an application for project {candidate.name}")
    
    for project in rostered_projects:
        if project.name == candidate.name:
            reasons.append(f"already on the roster of project {candidate.name}")
        elif project.overlaps(candidate):
            reasons.append(f"application period overlaps project {project.name}")
    
    return reasons


def can_open_project(current_project: Optional[Project], window: DateWindow) -> bool:
    """A manager may not open a project overlapping the one they currently handle"""
    if current_project is None:
        return True
    return not current_project.window.overlaps(window)
