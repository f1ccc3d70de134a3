"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures and configuration shared by every test
package.
"""

import pytest
from shoejack.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None
