"""
Resource server configuration settings
"""
import os
import hashlib


def _password_hash(password):
    return hashlib.sha256(password.encode()).hexdigest()


class ResourceServerConfig:
    """Centralized configuration for the resource server"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-here-change-in-production')

    # REST API
    API_BASE_PATH = os.environ.get('API_BASE_PATH', '/api')
    CURIE_NAME = 'sw360'
    DEFAULT_PAGE_ENTRIES = 20

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '300 per minute')

    # Backend data handler
    DATAHANDLER_URL = os.environ.get('DATAHANDLER_URL', 'http://localhost:8080/datahandler')
    DATAHANDLER_TIMEOUT = int(os.environ.get('DATAHANDLER_TIMEOUT', 30))

    # FOSSology process guard
    FOSSOLOGY_MAX_PROCESSES = 10
    FOSSOLOGY_MAX_ATTEMPTS = int(os.environ.get('FOSSOLOGY_MAX_ATTEMPTS', 10))
    FOSSOLOGY_POLL_INTERVAL = float(os.environ.get('FOSSOLOGY_POLL_INTERVAL', 30))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # API users for basic authentication
    API_USERS = {
        'admin@sw360.org': {
            'password_hash': _password_hash(os.environ.get('SW360_ADMIN_PASSWORD', 'admin')),
            'department': 'DEPARTMENT',
            'authorities': ['READ', 'WRITE'],
        },
        'reader@sw360.org': {
            'password_hash': _password_hash(os.environ.get('SW360_READER_PASSWORD', 'reader')),
            'department': 'DEPARTMENT',
            'authorities': ['READ'],
        },
    }


class TestingConfig(ResourceServerConfig):
    """Configuration used by the test suite"""

    TESTING = True
    RATELIMIT_ENABLED = False
    DATAHANDLER_URL = 'http://datahandler.test'
    FOSSOLOGY_MAX_ATTEMPTS = 2
    FOSSOLOGY_POLL_INTERVAL = 0
