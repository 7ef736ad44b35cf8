"""
Authentication Middleware - admin token check for the JSON API
"""
from functools import wraps
import hmac
from flask import request, current_app
from exceptions import AuthenticationException
import logging

logger = logging.getLogger('main')


def bearer_token(req):
    auth = req.headers.get('Authorization', '')
    if not auth.startswith('Bearer '):
        return None
    return auth[7:].strip() or None


def admin_required(f):
    """Require the configured admin token; open when none is configured"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        expected = current_app.config.get('ADMIN_API_TOKEN')
        if not expected:
            return f(*args, **kwargs)

        token = bearer_token(request)
        if not token:
            raise AuthenticationException()

        if not hmac.compare_digest(token.encode(), expected.encode()):
            logger.warning(f"Rejected admin token from {request.remote_addr}")
            raise AuthenticationException("Invalid admin token")

        return f(*args, **kwargs)
    return decorated_function
