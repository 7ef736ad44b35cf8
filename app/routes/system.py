"""
System Routes - health check for monitoring
"""

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import socket
import logging

from api_responses import success_response
from constants import BUILD_VERSION
from db import db
from utils import now_utc

logger = logging.getLogger("main")

system_bp = Blueprint("system", __name__, url_prefix="/api/system")


@system_bp.route("/health", methods=["GET"])
def health_check_api():
    """Unauthenticated so load balancers can poll it"""
    checks = {
        "timestamp": now_utc().isoformat(),
        "version": BUILD_VERSION,
        "hostname": socket.gethostname(),
        "database": "unknown",
        "storage": type(current_app.extensions["object_store"]).__name__,
    }
    status = "healthy"

    try:
        db.session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        checks["database"] = "error"
        status = "unhealthy"

    checks["status"] = status
    return success_response(checks, status_code=200 if status == "healthy" else 503)
