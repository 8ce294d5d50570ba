"""Shared fixtures for the resource server tests."""

import base64
import threading

import pytest

from fakes import FakeDataHandlerClient
from resource_server import create_app
from resource_server.config import TestingConfig
from resource_server.core.locks import ProcessLockRegistry


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {'Authorization': f"Basic {token}"}


@pytest.fixture
def datahandler():
    return FakeDataHandlerClient()


@pytest.fixture
def fossology_locks():
    return ProcessLockRegistry(max_entries=TestingConfig.FOSSOLOGY_MAX_PROCESSES)


@pytest.fixture
def app(datahandler, fossology_locks):
    app = create_app(TestingConfig, client=datahandler, fossology_locks=fossology_locks)
    yield app
    # let background FOSSology workers finish before the next test
    datahandler.fossology_gate.set()
    for worker in threading.enumerate():
        if worker.name.startswith('fossology-'):
            worker.join(timeout=5)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def writer_headers():
    return basic_auth('admin@sw360.org', 'admin')


@pytest.fixture
def reader_headers():
    return basic_auth('reader@sw360.org', 'reader')
