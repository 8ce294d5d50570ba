#!/usr/bin/env python3
"""
SW360 Release Resource Server
Flask application serving the release REST API as HAL+JSON
"""
import logging
import os

from flask import Flask, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .components import init_components
from .config.settings import ResourceServerConfig
from .core.auth import get_sw360_user
from .core.errors import register_error_handlers
from .routes import health_bp, main_bp
from .services import initialize_services

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ResourceServerApp:
    """Main resource server application class"""

    def __init__(self, config_object=ResourceServerConfig, **service_overrides):
        self.app = None
        self.limiter = None
        self.config_object = config_object
        self.service_overrides = service_overrides

    def create_app(self):
        """Create and configure Flask application"""
        self.app = Flask(__name__)

        # Load configuration
        self.app.config.from_object(self.config_object)
        logging.getLogger('resource_server').setLevel(self.app.config['LOG_LEVEL'])

        # Initialize extensions
        self.limiter = Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URI'],
        )

        # Backend services must exist before any component serves requests
        initialize_services(self.app, **self.service_overrides)
        register_error_handlers(self.app)

        api_base_path = self.app.config['API_BASE_PATH']

        @self.app.before_request
        def authenticate_api_requests():
            if request.path == api_base_path or request.path.startswith(api_base_path + '/'):
                get_sw360_user()

        # Register blueprints
        self.app.register_blueprint(main_bp, url_prefix=api_base_path)
        self.app.register_blueprint(health_bp)
        init_components(self.app)

        return self.app

    def run(self):
        """Start the resource server"""
        host = os.environ.get('HOST', '0.0.0.0')
        port = int(os.environ.get('PORT', 8091))
        base = self.app.config['API_BASE_PATH']

        logger.info("=" * 60)
        logger.info("SW360 Release Resource Server")
        logger.info(f"Starting on: http://localhost:{port}")
        logger.info("Endpoints:")
        logger.info(f"   - API root:  http://localhost:{port}{base}")
        logger.info(f"   - Releases:  http://localhost:{port}{base}/releases")
        logger.info(f"   - Health:    http://localhost:{port}/health")
        logger.info(f"Data handler: {self.app.config['DATAHANDLER_URL']}")
        logger.info("=" * 60)

        self.app.run(host=host, port=port, debug=False)


def create_app(config_object=ResourceServerConfig, **service_overrides):
    """Application factory"""
    return ResourceServerApp(config_object, **service_overrides).create_app()


def main():
    """Main entry point"""
    resource_server = ResourceServerApp()
    resource_server.create_app()
    resource_server.run()


if __name__ == '__main__':
    main()
