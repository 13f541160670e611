from .wizard import ProjectWizard
from .membership import ProjectMembershipService

__all__ = ["ProjectWizard", "ProjectMembershipService"]
