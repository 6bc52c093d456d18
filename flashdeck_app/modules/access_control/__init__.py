from flask import Blueprint

access_control_bp = Blueprint('access_control', __name__)

from .exceptions import AccessControlError, PermissionDeniedError, QuotaExceededError  # noqa: E402
from .decorators import handle_access_control_error  # noqa: E402


def register_access_control_handlers(app):
    """Register error handlers for the access control exceptions."""
    app.register_error_handler(PermissionDeniedError, handle_access_control_error)
    app.register_error_handler(QuotaExceededError, handle_access_control_error)


from . import routes  # noqa: E402,F401
