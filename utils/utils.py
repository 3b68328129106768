import logging
from functools import wraps

from flask import g
from utils.helpers import error_response
from utils.tokens import decode_jwt, get_request_token

logger = logging.getLogger(__name__)


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_request_token()
        if not token:
            logger.debug("No credential found on request")
            return error_response("Unauthorized", 401)

        decoded = decode_jwt(token)
        if not decoded or not decoded.get("user_id"):
            return error_response("Invalid or expired token", 401)
        g.user = decoded

        return f(*args, **kwargs)

    return decorated_function


def instructor_required(f):
    """Must be stacked under login_required."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.user.get("role") != "instructor":
            return error_response("Unauthorized: instructors only", 403)
        return f(*args, **kwargs)

    return decorated_function
