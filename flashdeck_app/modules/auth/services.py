"""
Auth Service - user registration and credential checks.

Keeps database logic out of the routes.
"""
from flask import current_app

from flashdeck_app.models import db, User


class AuthService:
    """Service for Authentication related operations."""

    @staticmethod
    def register_user(username, email, password, plan_role=User.ROLE_FREE):
        """
        Register a new user on the given plan (free by default).

        Returns:
            The created User.
        """
        user = User(
            username=username,
            email=email,
            plan_role=plan_role,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f"User registered: {username} ({user.user_id})")
        return user

    @staticmethod
    def authenticate_user(username, password):
        """
        Verify credentials.

        Returns:
            User object if valid, None otherwise.
        """
        user = User.query.filter_by(username=username).first()
        if user and user.check_password(password):
            return user
        return None
