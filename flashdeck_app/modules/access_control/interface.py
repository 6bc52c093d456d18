from typing import Union

from .services.permission_service import PermissionService


class AccessControlInterface:
    """
    Public Gateway for Access Control Module.
    Pattern: Facade
    """

    @staticmethod
    def check(user, permission_key: str) -> bool:
        """Check if user has a feature."""
        return PermissionService.check_permission(user, permission_key)

    @staticmethod
    def require(user, permission_key: str, message: str = "Permission denied"):
        """Raise PermissionDeniedError unless the user has the feature."""
        PermissionService.ensure_permission(user, permission_key, message=message)

    @staticmethod
    def get_limit(user, limit_key: str) -> Union[int, float]:
        """Get resource limit for user."""
        return PermissionService.get_limit(user, limit_key)

    @staticmethod
    def enforce_quota(user, limit_key: str, current_usage: int, message: str = "Quota exceeded"):
        """
        Check quota and raise QuotaExceededError if violated.
        """
        PermissionService.check_quota(user, limit_key, current_usage, message=message)

    @staticmethod
    def assign_role(user_id: int, role: str) -> bool:
        """Assign plan role to user."""
        return PermissionService.assign_role(user_id, role)
