import logging

import bleach
from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from classes.validators import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_TAGS = ["p", "br", "strong", "em", "u", "s", "ul", "ol", "li", "h1", "h2", "h3", "blockquote", "code", "pre", "a"]
ALLOWED_ATTRIBUTES = {"a": ["href", "title", "rel", "target"]}


def get_json_body():
    """JSON object from the request body; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"body": "Request body must be a JSON object."}, message="Invalid request body")
    return data


def format_datetime(datetime_obj):
    """Format datetime to a readable string."""
    if not datetime_obj:
        return None
    return datetime_obj.strftime('%Y-%m-%d %H:%M:%S')


def sanitize_html(value):
    if value is None:
        return None
    return bleach.clean(value, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)


def error_response(message, status_code, **extra):
    return jsonify({"success": False, "message": message, **extra}), status_code


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return error_response(error.message, 400, errors=error.errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error: %s", error)
        return error_response("Internal server error", 500)
