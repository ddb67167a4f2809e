"""Fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from relay.interface.api.app import create_app
from relay.util.di.container import setup_di
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container.

    Used as a context manager so HTTP requests and WebSocket sessions
    share one event loop.
    """
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    with TestClient(app_instance) as test_client:
        yield test_client
