"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from config import Settings


@pytest.fixture(scope="function")
def client(image_settings):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from main import app, init_app_state

    init_app_state(app, Settings(image=image_settings))

    # No context manager, the lifespan would replace the test state
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client
