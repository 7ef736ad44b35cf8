"""
Nexiplay Admin - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class NexiplayException(Exception):
    """Base exception for Nexiplay Admin"""
    status_code = 400

    def __init__(self, message: str, code: str = "NEXIPLAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': True,
            'code': self.code,
            'message': self.message
        }


class DatabaseException(NexiplayException):
    """Relational backend failures"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="DATABASE_ERROR")
        logger.error(f"Database error: {message}")


class StorageException(NexiplayException):
    """Object store failures"""
    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")
        logger.warning(f"Storage error: {message}")


class ValidationException(NexiplayException):
    """Validation-related exceptions"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
        logger.warning(f"Validation error: {message}")


class NotFoundException(NexiplayException):
    """Expected-absence: the requested row does not exist"""
    status_code = 404

    def __init__(self, resource_type: str, resource_id=None):
        if resource_id is not None:
            message = f"{resource_type} with ID '{resource_id}' not found"
        else:
            message = f"{resource_type} not found"
        super().__init__(message, code="NOT_FOUND")


class ConfirmationRequiredException(NexiplayException):
    """Destructive action attempted without explicit confirmation"""
    status_code = 400

    def __init__(self, message: str = "This action cannot be undone. Resend with confirm=true."):
        super().__init__(message, code="CONFIRMATION_REQUIRED")


class AuthenticationException(NexiplayException):
    """Authentication-related exceptions"""
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTH_ERROR")
        logger.warning(f"Authentication error: {message}")


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'error': True,
            'code': e.name.upper().replace(' ', '_'),
            'message': e.description
        }), e.code

    @app.errorhandler(NexiplayException)
    def handle_nexiplay_exception(e):
        """Each subclass carries its own status code"""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'error': True,
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred'
        }), 500
