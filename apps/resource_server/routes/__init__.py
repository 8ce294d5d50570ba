"""
Resource server routes outside the API components
"""
from .main_routes import health_bp, main_bp

__all__ = ['health_bp', 'main_bp']
