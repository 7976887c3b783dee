"""ORM Models Package"""

from .user import UserModel
from .project import ProjectModel, ProjectFlatModel, ProjectOfficerModel
from .application import ApplicationModel
from .enquiry import EnquiryModel

__all__ = [
    "UserModel",
    "ProjectModel",
    "ProjectFlatModel",
    "ProjectOfficerModel",
    "ApplicationModel",
    "EnquiryModel",
]
