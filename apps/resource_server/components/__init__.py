"""
Component registry for the resource server
This module lists all API components and registers them with the app.
"""
from .fossology import init_fossology
from .release_attachments import init_release_attachments
from .release_vulnerabilities import init_release_vulnerabilities
from .releases import init_releases

COMPONENTS = {
    'releases': init_releases,
    'release_attachments': init_release_attachments,
    'release_vulnerabilities': init_release_vulnerabilities,
    'fossology': init_fossology,
}


def init_components(app):
    """Register every component blueprint with ``app``"""
    return {name: init(app) for name, init in COMPONENTS.items()}


__all__ = ['COMPONENTS', 'init_components']
