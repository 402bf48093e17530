"""Test configuration for huebridge."""

import pytest

from huebridge.colorspace.register import register_builtin_models


@pytest.fixture(scope="session", autouse=True)
def register_models():
    """Ensure the model registry is populated for all tests."""
    register_builtin_models()
