"""
Client for the SW360 backend data handler

Every backend service method is reached with a JSON call
``POST {base_url}/{service}/{method}`` carrying ``{"params": ..., "user": ...}``
and answering ``{"result": ...}``. Attachment content has its own endpoints.
"""
import logging

import requests

from ..core.errors import AccessDeniedError, DataHandlerError, ResourceNotFoundError
from ..models import RequestStatus

logger = logging.getLogger(__name__)


def parse_request_status(value, operation):
    """RequestStatus for a backend answer, DataHandlerError for anything else"""
    try:
        return RequestStatus(value)
    except ValueError as e:
        logger.error(f"Backend call {operation} returned unexpected status {value!r}")
        raise DataHandlerError(f"Backend call {operation} returned an unexpected status") from e


class DataHandlerClient:
    """Thin requests-based client for the backend services"""

    def __init__(self, base_url, timeout=30, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def call(self, service, method, user=None, **params):
        """Invoke ``service.method`` on the backend and return its result"""
        url = f"{self.base_url}/{service}/{method}"
        payload = {'params': params}
        if user is not None:
            payload['user'] = user.to_dict()

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Backend call {service}.{method} failed: {e}")
            raise DataHandlerError(f"Backend call {service}.{method} failed: {e}") from e

        self._raise_for_status(response, f"{service}.{method}")
        try:
            return response.json().get('result')
        except ValueError as e:
            raise DataHandlerError(f"Backend call {service}.{method} returned invalid JSON") from e

    def upload_content(self, filename, content, content_type=None, user=None):
        """Store attachment content and return its attachment content id"""
        url = f"{self.base_url}/attachments/content"
        files = {'file': (filename, content, content_type or 'application/octet-stream')}
        data = {'user': user.email} if user is not None else None
        try:
            response = self.session.post(url, files=files, data=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise DataHandlerError(f"Uploading {filename} failed: {e}") from e
        self._raise_for_status(response, 'attachments.upload')
        return response.json()['attachmentContentId']

    def download_content(self, attachment_content_id, user=None):
        """Raw bytes of a stored attachment"""
        url = f"{self.base_url}/attachments/content/{attachment_content_id}"
        params = {'user': user.email} if user is not None else None
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise DataHandlerError(f"Downloading attachment {attachment_content_id} failed: {e}") from e
        self._raise_for_status(response, 'attachments.download')
        return response.content

    def is_available(self):
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=3)
            return response.status_code == 200
        except requests.exceptions.RequestException:
            return False

    @staticmethod
    def _raise_for_status(response, operation):
        if response.status_code < 400:
            return
        try:
            message = response.json().get('message')
        except ValueError:
            message = None
        message = message or f"{operation} returned HTTP {response.status_code}"
        if response.status_code == 404:
            raise ResourceNotFoundError(message)
        if response.status_code == 403:
            raise AccessDeniedError(message)
        raise DataHandlerError(message)
