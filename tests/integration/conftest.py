"""Fixtures for integration tests."""

from __future__ import annotations

import os

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def marketstack_api_key() -> str:
    """Get the marketstack access key from environment.

    Skips test if the key is not available.
    """
    api_key = os.environ.get("MARKETSTACK_API_KEY")
    if not api_key:
        pytest.skip("MARKETSTACK_API_KEY required for integration tests")
    return api_key
