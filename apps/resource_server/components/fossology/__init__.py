"""
FOSSology Component
"""
from .routes import fossology_bp


def init_fossology(app):
    """Initialize FOSSology component with Flask app"""
    app.register_blueprint(fossology_bp, url_prefix=app.config['API_BASE_PATH'])
    return fossology_bp


__all__ = ['fossology_bp', 'init_fossology']
