"""
Root and health routes for the resource server
"""
import logging
import os
import time

import psutil
from flask import Blueprint, current_app, jsonify, request

from ..core.hal import api_url, curie, hal_response
from ..core.helper import RELEASES_URL
from ..services import get_datahandler_client, get_fossology_locks

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)
health_bp = Blueprint('health', __name__)


@main_bp.route('', methods=['GET'])
def api_root():
    """Links to the resource collections served here"""
    curie_name = current_app.config['CURIE_NAME']
    body = {
        '_links': {
            curie('releases'): {'href': api_url(RELEASES_URL)},
            'curies': [{
                'href': f"{request.host_url.rstrip('/')}/resource/docs/{{rel}}.html",
                'name': curie_name,
                'templated': True,
            }],
        }
    }
    return hal_response(body)


@health_bp.route('/health', methods=['GET'])
def health():
    """Health check with backend connectivity and process information"""
    try:
        backend_ok = get_datahandler_client().is_available()
        process = psutil.Process(os.getpid())
        with process.oneshot():
            memory_rss = process.memory_info().rss
            uptime = time.time() - process.create_time()

        health_info = {
            'status': 'healthy' if backend_ok else 'degraded',
            'datahandler': 'connected' if backend_ok else 'disconnected',
            'fossology_processes': len(get_fossology_locks()),
            'process': {
                'pid': process.pid,
                'memory_rss': memory_rss,
                'uptime_seconds': round(uptime, 1),
            },
            'service': 'SW360 Release Resource Server',
        }
        return jsonify(health_info), 200 if backend_ok else 503

    except Exception as e:
        logger.exception(f"Health check failed: {e}")
        return jsonify({'status': 'error', 'message': str(e)}), 503
