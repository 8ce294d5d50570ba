"""
Basic authentication and authority checks
"""
import hashlib
import hmac
import logging
from functools import wraps

from flask import current_app, g, request

from ..models import User
from .errors import AccessDeniedError, AuthenticationError

logger = logging.getLogger(__name__)

WRITE_AUTHORITY = 'WRITE'


def authenticate_request():
    """Resolve the user from the request's Basic credentials"""
    credentials = request.authorization
    if credentials is None or not credentials.username:
        raise AuthenticationError("Full authentication is required to access this resource")

    user_config = current_app.config['API_USERS'].get(credentials.username)
    if not user_config:
        logger.info(f"Rejected credentials for unknown user {credentials.username}")
        raise AuthenticationError("Bad credentials")

    password_hash = hashlib.sha256((credentials.password or '').encode()).hexdigest()
    if not hmac.compare_digest(password_hash, user_config['password_hash']):
        logger.info(f"Rejected credentials for user {credentials.username}")
        raise AuthenticationError("Bad credentials")

    return User(
        email=credentials.username,
        department=user_config.get('department'),
        authorities=user_config.get('authorities', ()),
    )


def get_sw360_user():
    """User authenticated for the current request"""
    user = g.get('sw360_user')
    if user is None:
        user = authenticate_request()
        g.sw360_user = user
    return user


def requires_authority(authority):
    """Reject the request with 403 unless the user holds ``authority``"""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = get_sw360_user()
            if not user.has_authority(authority):
                raise AccessDeniedError("Access is denied")
            return view(*args, **kwargs)
        return wrapper
    return decorator
