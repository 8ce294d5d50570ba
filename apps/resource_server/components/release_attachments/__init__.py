"""
Release Attachments Component
"""
from .routes import release_attachments_bp


def init_release_attachments(app):
    """Initialize Release Attachments component with Flask app"""
    app.register_blueprint(release_attachments_bp, url_prefix=app.config['API_BASE_PATH'])
    return release_attachments_bp


__all__ = ['release_attachments_bp', 'init_release_attachments']
