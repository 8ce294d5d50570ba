"""
Release Vulnerabilities Component
"""
from .routes import release_vulnerabilities_bp


def init_release_vulnerabilities(app):
    """Initialize Release Vulnerabilities component with Flask app"""
    app.register_blueprint(release_vulnerabilities_bp, url_prefix=app.config['API_BASE_PATH'])
    return release_vulnerabilities_bp


__all__ = ['release_vulnerabilities_bp', 'init_release_vulnerabilities']
