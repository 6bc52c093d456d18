from flask import jsonify

from .exceptions import AccessControlError, PermissionDeniedError, QuotaExceededError


def handle_access_control_error(error: AccessControlError):
    """
    Standard error handler for access control exceptions.
    Returns structured JSON response.
    """
    response = {
        "success": False,
        "error": error.__class__.__name__,
        "message": str(error),
        "requires_upgrade": True,
    }

    if isinstance(error, PermissionDeniedError):
        response["permission_key"] = error.permission_key

    if isinstance(error, QuotaExceededError):
        response["limit_key"] = error.limit_key
        response["limit"] = error.limit
        response["current"] = error.current_usage

    return jsonify(response), 403
