"""
Resource server configuration
"""
from .settings import ResourceServerConfig, TestingConfig

__all__ = ['ResourceServerConfig', 'TestingConfig']
