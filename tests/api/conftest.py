"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from pixelflow.api.app import create_app
from pixelflow.image.io import encode_image


@pytest.fixture(scope="function")
def client(settings):
    """
    Create a test client with its own app instance.
    Each test gets a fresh app to avoid state contamination.
    """
    app = create_app(settings)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def png_upload(random_buffer):
    """Random buffer encoded as PNG for multipart upload"""
    return {"file": ("input.png", encode_image(random_buffer, ".png"), "image/png")}
