"""
utils/responses.py
------------------
Uniform JSON envelope for every API response and the error handlers
that turn raised ApiError / pydantic errors into that envelope.
"""

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from utils.logger import get_logger
from utils.messages import MESSAGE_PAGE_NOT_FOUND, MESSAGE_SOMETHING_WENT_WRONG

logger = get_logger(__name__)

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

STATUS_CODE_SUCCESS = 200
STATUS_CODE_BAD_REQUEST = 400
STATUS_CODE_UNAUTHORIZED = 401
STATUS_CODE_NOT_FOUND = 404
STATUS_CODE_CONFLICT = 409
STATUS_CODE_INTERNAL_SERVER_ERROR = 500


class ApiError(Exception):
    """Raised inside a request to short-circuit with an error envelope."""

    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def envelope(status, status_code, message, data=None, total=None):
    return {
        "status": status,
        "statusCode": status_code,
        "message": message,
        "data": data,
        "total": total,
    }


def handle_success(message, data=None, total=None, status_code=STATUS_CODE_SUCCESS):
    return jsonify(envelope(STATUS_SUCCESS, status_code, message, data, total)), status_code


def handle_error(status_code, message):
    return jsonify(envelope(STATUS_ERROR, status_code, message)), status_code


def validation_message(error):
    """Flatten a pydantic ValidationError into one comma-joined message."""
    messages = []
    for err in error.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        text = err.get("msg", "Invalid value")
        messages.append(f"{field}: {text}" if field else text)
    return ", ".join(messages)


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return handle_error(error.status_code, error.message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return handle_error(STATUS_CODE_BAD_REQUEST, validation_message(error))

    @app.errorhandler(404)
    def handle_not_found(error):
        return handle_error(STATUS_CODE_NOT_FOUND, MESSAGE_PAGE_NOT_FOUND)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return handle_error(error.code, error.description or error.name)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return handle_error(STATUS_CODE_INTERNAL_SERVER_ERROR, MESSAGE_SOMETHING_WENT_WRONG)
