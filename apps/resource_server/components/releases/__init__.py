"""
Releases Component
"""
from .routes import releases_bp


def init_releases(app):
    """Initialize Releases component with Flask app"""
    app.register_blueprint(releases_bp, url_prefix=app.config['API_BASE_PATH'])
    return releases_bp


__all__ = ['releases_bp', 'init_releases']
