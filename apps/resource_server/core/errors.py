"""
Error types raised by the resource server and their JSON rendering
"""
import logging
from datetime import datetime, timezone

from flask import jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.http import HTTP_STATUS_CODES

logger = logging.getLogger(__name__)


class ResourceServerError(Exception):
    """Base error carrying the HTTP status it is rendered with"""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message)
        self.message = message or HTTP_STATUS_CODES.get(self.status_code, 'Error')


class MessageNotReadableError(ResourceServerError):
    """Request body is missing, malformed or semantically invalid"""
    status_code = 400


class PaginationParameterError(ResourceServerError):
    status_code = 400


class AuthenticationError(ResourceServerError):
    status_code = 401


class AccessDeniedError(ResourceServerError):
    status_code = 403


class ResourceNotFoundError(ResourceServerError):
    status_code = 404


class ConflictError(ResourceServerError):
    status_code = 409


class DataHandlerError(ResourceServerError):
    """The backend data handler failed or could not be reached"""
    status_code = 500


class AttachmentUploadError(ResourceServerError):
    status_code = 500


def error_response(status_code, message):
    """Build the standard error envelope"""
    body = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'status': status_code,
        'error': HTTP_STATUS_CODES.get(status_code, 'Unknown Error'),
        'message': message,
    }
    return jsonify(body), status_code


def register_error_handlers(app):
    """Install JSON error handlers on the Flask app"""

    @app.errorhandler(ResourceServerError)
    def handle_resource_server_error(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        response, status = error_response(error.status_code, error.message)
        if isinstance(error, AuthenticationError):
            response.headers['WWW-Authenticate'] = 'Basic realm="sw360"'
        return response, status

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.code, error.description)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error: {error}")
        return error_response(500, HTTP_STATUS_CODES[500])
