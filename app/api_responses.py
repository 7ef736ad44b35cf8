"""
API Response Utilities - Standardized success, error and paginated bodies
"""

from flask import jsonify
import logging

logger = logging.getLogger(__name__)


class ErrorCode:
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"


DEFAULT_MESSAGES = {
    ErrorCode.NOT_FOUND: "Resource not found",
    ErrorCode.VALIDATION_ERROR: "Invalid request parameters",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
    ErrorCode.UNAUTHORIZED: "Authentication required",
    ErrorCode.CONFIRMATION_REQUIRED: "This action cannot be undone",
}


def success_response(data=None, message=None, status_code=200):
    """
    Standard success response format for API endpoints
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return jsonify(response), status_code


def error_response(error_code=ErrorCode.INTERNAL_ERROR, message=None, details=None, status_code=400, log_error=True):
    """
    Standard error response format for API endpoints
    """
    response = {"code": error_code, "success": False}
    response["message"] = message or DEFAULT_MESSAGES.get(error_code, "Request failed")

    if details:
        response["details"] = details

    if log_error and error_code in [ErrorCode.INTERNAL_ERROR, ErrorCode.VALIDATION_ERROR]:
        logger.error(f"{error_code}: {message} | Details: {details}")

    return jsonify(response), status_code


def paginated_response(items, total, page, per_page, has_more=None):
    """
    Standard paginated response format for list endpoints
    """
    response = {
        "code": ErrorCode.SUCCESS,
        "success": True,
        "data": items,
        "pagination": {
            "total": total,
            "page": page,
            "per_page": per_page,
            "total_pages": (total + per_page - 1) // per_page,
        },
    }

    if has_more is not None:
        response["pagination"]["has_more"] = has_more
    else:
        response["pagination"]["has_more"] = page * per_page < total

    response["pagination"]["next_page"] = page + 1 if response["pagination"]["has_more"] else None
    response["pagination"]["prev_page"] = page - 1 if page > 1 else None

    return jsonify(response), 200
