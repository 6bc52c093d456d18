from typing import Union

from flask import current_app

from flashdeck_app.models import db, User
from ..logics.policies import get_role_policy, PolicyValues, ROLE_FREE, ROLE_POLICIES
from ..exceptions import PermissionDeniedError, QuotaExceededError
from ..signals import role_changed, access_denied


class PermissionService:
    """Service to handle feature checks, quota enforcement, and plan changes."""

    @staticmethod
    def get_role(user) -> str:
        """Helper to get the user's plan role safely."""
        return getattr(user, 'plan_role', None) or ROLE_FREE

    @classmethod
    def check_permission(cls, user, permission_key: str) -> bool:
        """Return whether the user's plan grants ``permission_key``."""
        if not user:
            return False

        policy = get_role_policy(cls.get_role(user))
        return policy.get('permissions', {}).get(permission_key, False)

    @classmethod
    def get_limit(cls, user, limit_key: str) -> Union[int, float]:
        """Get the numeric limit for a specific quota key."""
        policy = get_role_policy(cls.get_role(user))
        return policy.get('limits', {}).get(limit_key, 0)

    @classmethod
    def check_quota(cls, user, limit_key: str, current_usage: int, message: str = "Quota exceeded") -> bool:
        """
        Check if usage is within limits.
        Raises QuotaExceededError if limit reached.
        """
        limit = cls.get_limit(user, limit_key)

        if limit == PolicyValues.UNLIMITED:
            return True

        if current_usage >= limit:
            raise QuotaExceededError(limit_key, current_usage, int(limit), message=message)

        return True

    @classmethod
    def ensure_permission(cls, user, permission_key: str, message: str = "Permission denied"):
        """
        Enforce a feature check. Raises PermissionDeniedError if it fails.
        Fires access_denied signal on failure.
        """
        if not cls.check_permission(user, permission_key):
            access_denied.send(
                current_app._get_current_object(),
                user_id=getattr(user, 'user_id', None),
                permission_key=permission_key
            )
            raise PermissionDeniedError(permission_key, message=message)

    @classmethod
    def assign_role(cls, user_id: int, new_role: str) -> bool:
        """
        Move a user to another plan.
        Updates DB and emits signal.
        """
        if new_role not in ROLE_POLICIES:
            raise ValueError(f"Unknown plan role: {new_role}")

        user = db.session.get(User, user_id)
        if not user:
            return False

        old_role = user.plan_role
        if old_role == new_role:
            return True

        user.plan_role = new_role
        db.session.commit()

        role_changed.send(
            current_app._get_current_object(),
            user_id=user.user_id,
            old_role=old_role,
            new_role=new_role
        )

        current_app.logger.info(f"Plan changed for user {user_id}: {old_role} -> {new_role}")
        return True
