"""
Fixtures for unit tests that run without a real Redis instance.
"""

import pytest

from utils.status_store import StatusStore


@pytest.fixture
def status_store(mock_redis):
    """StatusStore backed by the mocked Redis client."""
    return StatusStore(mock_redis, key="factory:status")
