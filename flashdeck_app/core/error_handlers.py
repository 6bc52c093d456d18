"""
Error types and handlers shared by every Flashdeck module.

Services raise ``FlashdeckError`` subclasses; the handlers below render them
as ``{"success": false, "message", "code", "details"}`` with the matching
status. HTML pages keep Flask's default error pages, only ``/api/`` requests
get JSON.
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from flask_wtf.csrf import CSRFError
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException


class FlashdeckError(Exception):
    """Base class for errors that carry their own HTTP status."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details,
        }


class NotFoundError(FlashdeckError):
    """A deck or card is missing or belongs to someone else."""

    def __init__(self, message: str = 'Resource not found', resource: Optional[str] = None):
        super().__init__(
            message=message,
            code='NOT_FOUND',
            status_code=404,
            details={'resource': resource} if resource else None,
        )


class ValidationError(FlashdeckError):
    """Request data or state does not allow the operation."""

    def __init__(self, message: str = 'Validation failed', errors: Optional[Dict] = None):
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            status_code=400,
            details={'errors': errors} if errors else None,
        )


def error_response(message: str, code: str = 'ERROR', status_code: int = 400, details: Optional[Dict] = None):
    """JSON error body in the same shape as ``FlashdeckError.to_dict``."""
    body = {'success': False, 'message': message, 'code': code}
    if details:
        body['details'] = details
    return jsonify(body), status_code


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return body


def _is_api_request() -> bool:
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Attach the core handlers to ``app``."""

    @app.errorhandler(FlashdeckError)
    def handle_flashdeck_error(error):
        log = current_app.logger.error if error.status_code >= 500 else current_app.logger.warning
        log(f"{error.code} on {request.method} {request.path}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(error):
        return error_response('Validation failed', 'VALIDATION_ERROR', 400, {'errors': error.messages})

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        current_app.logger.warning(f"CSRF check failed on {request.path}: {error.description}")
        if _is_api_request():
            return error_response('The page expired. Please reload and try again.', 'CSRF_ERROR', 400)
        return error

    @app.errorhandler(404)
    def handle_not_found(error):
        if _is_api_request():
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error: HTTPException):
        if _is_api_request():
            return error_response('Method not allowed', 'METHOD_NOT_ALLOWED', 405)
        return error

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if _is_api_request():
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
