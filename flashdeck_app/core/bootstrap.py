"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from typing import Callable

from flask import Flask, jsonify, redirect, request, url_for
from flask_login import current_user

from ..extensions import csrf_protect, db, login_manager
from .error_handlers import register_error_handlers as _register_core_error_handlers
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure application logging from the app config."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
        log_to_file=app.config.get("LOG_TO_FILE", True),
    )
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)
    csrf_protect.init_app(app)


def register_context_processors(app: Flask) -> None:
    """Register global template context processors and the login hooks."""

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        if request.path.startswith("/api/"):
            return jsonify({"success": False, "message": "Unauthorized", "code": "UNAUTHENTICATED"}), 401
        return redirect(url_for(login_manager.login_view, next=request.path))

    @app.context_processor
    def inject_user() -> dict[str, object]:
        return {"current_user": current_user}

    @app.context_processor
    def inject_plan_helpers() -> dict[str, Callable[..., object]]:
        from ..modules.access_control.interface import AccessControlInterface

        def has_feature(feature_key: str) -> bool:
            return current_user.is_authenticated and AccessControlInterface.check(current_user, feature_key)

        return {"has_feature": has_feature}


def register_error_handlers(app: Flask) -> None:
    """Register core and module level error handlers."""

    from ..modules.access_control import register_access_control_handlers

    _register_core_error_handlers(app)
    register_access_control_handlers(app)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401  (register mappers before create_all)

    db.create_all()
    app.logger.info("Database tables ensured at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))
