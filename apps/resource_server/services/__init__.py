"""
Backend services used by the resource server components
"""
import logging

from flask import current_app

from ..core.locks import ProcessLockRegistry
from .attachment_service import AttachmentService
from .datahandler_client import DataHandlerClient
from .release_service import ReleaseService
from .vulnerability_service import VulnerabilityService

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'resource_server'


def initialize_services(app, **overrides):
    """Create the service instances for ``app``

    Any service can be replaced through ``overrides`` (``client``,
    ``release_service``, ``attachment_service``, ``vulnerability_service``,
    ``fossology_locks``).
    """
    config = app.config
    client = overrides.get('client')
    if client is None:
        client = DataHandlerClient(config['DATAHANDLER_URL'], timeout=config['DATAHANDLER_TIMEOUT'])
    services = {
        'client': client,
        'release_service': ReleaseService(
            client,
            fossology_max_attempts=config['FOSSOLOGY_MAX_ATTEMPTS'],
            fossology_poll_interval=config['FOSSOLOGY_POLL_INTERVAL'],
        ),
        'attachment_service': AttachmentService(client),
        'vulnerability_service': VulnerabilityService(client),
        'fossology_locks': ProcessLockRegistry(config['FOSSOLOGY_MAX_PROCESSES']),
    }
    # empty registries are falsy, so compare against None
    services.update({name: service for name, service in overrides.items()
                     if name in services and service is not None})
    app.extensions[EXTENSION_KEY] = services
    logger.info(f"Services initialized against data handler {config['DATAHANDLER_URL']}")
    return services


def _service(name):
    return current_app.extensions[EXTENSION_KEY][name]


def get_datahandler_client():
    return _service('client')


def get_release_service():
    return _service('release_service')


def get_attachment_service():
    return _service('attachment_service')


def get_vulnerability_service():
    return _service('vulnerability_service')


def get_fossology_locks():
    return _service('fossology_locks')


__all__ = [
    'AttachmentService', 'DataHandlerClient', 'ReleaseService', 'VulnerabilityService',
    'initialize_services', 'get_datahandler_client', 'get_release_service',
    'get_attachment_service', 'get_vulnerability_service', 'get_fossology_locks',
]
