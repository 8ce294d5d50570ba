"""
SW360 release resource server
"""
from .resource_server_app import ResourceServerApp, create_app

__version__ = '1.0.0'

__all__ = ['ResourceServerApp', 'create_app', '__version__']
