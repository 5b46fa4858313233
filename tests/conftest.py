"""Shared fixtures for the image toolkit tests.

``STORAGE_DIR`` is pointed at a throwaway directory before anything from
``image_toolkit`` is imported, so uploads and outputs never touch the real
storage location.
"""

import os
import shutil
import tempfile
from io import BytesIO

import pytest
from PIL import Image

_STORAGE_DIR = tempfile.mkdtemp(prefix="image-toolkit-tests-")
os.environ["STORAGE_DIR"] = _STORAGE_DIR
os.environ["LOG_LEVEL"] = "WARNING"


def make_image_bytes(size=(320, 240), color=(40, 90, 160), fmt="JPEG") -> bytes:
    image = Image.new("RGB", size, color=color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture(scope="session", autouse=True)
def _cleanup_storage():
    yield
    shutil.rmtree(_STORAGE_DIR, ignore_errors=True)


@pytest.fixture(scope="session")
def settings():
    from image_toolkit.core.config import get_settings

    return get_settings()


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient

    from image_toolkit.main import app

    return TestClient(app)


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def small_jpeg_bytes() -> bytes:
    return make_image_bytes(size=(100, 100))
