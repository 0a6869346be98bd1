"""
Core pytest configuration and fixtures for pillchat testing.

This module provides shared test fixtures: sample model replies in each shape
the parser understands, mock pillars, and a ready-to-use app.
"""

from typing import List
from unittest.mock import MagicMock

import pytest
from pillchat.models import ASSISTANT_ROLE, USER_ROLE, Turn

# ===== TEST DATA FIXTURES =====

PRESCRIPTION_REPLY = """**نسخه پزشکی**

[PRESCRIPTION_START]
1. Acetaminophen - 500mg twice daily
2. Amoxicillin - 250mg every 8 hours
[PRESCRIPTION_END]"""

SUMMARY_REPLY = """**موارد تجویز:**
خوراکی
روزی دوبار
**عوارض:**
سردرد"""


@pytest.fixture
def prescription_reply() -> str:
    return PRESCRIPTION_REPLY


@pytest.fixture
def summary_reply() -> str:
    return SUMMARY_REPLY


@pytest.fixture
def sample_turns() -> List[Turn]:
    """A short conversation with one reply of each shape."""
    return [
        Turn(role=USER_ROLE, text="", image="data:image/png;base64,iVBORw0KGgo="),
        Turn(role=ASSISTANT_ROLE, text=PRESCRIPTION_REPLY),
        Turn(role=USER_ROLE, text="ibuprofen"),
        Turn(role=ASSISTANT_ROLE, text=SUMMARY_REPLY),
        Turn(role=ASSISTANT_ROLE, text="Plain answer without structure."),
    ]


# ===== MOCK FIXTURES =====


@pytest.fixture
def mock_transport():
    """Mock transport that always answers with a summary."""
    mock = MagicMock()
    mock.send.return_value = SUMMARY_REPLY
    return mock


@pytest.fixture
def mock_llm():
    """Mock LLM provider for testing."""
    mock = MagicMock()
    mock.generate_response.return_value = {
        "choices": [{"message": {"content": "Mock LLM response"}}]
    }
    mock.extract_content.return_value = "Mock LLM response"
    return mock


# ===== APP FIXTURES =====


@pytest.fixture
def test_app():
    """
    Provides a Pillchat app instance with simple, predictable pillars.

    The Echo LLM keeps the in-process backend offline.
    """
    from pillchat import Pillchat
    from pillchat.config import Settings
    from pillchat.ledger import InMemory
    from pillchat.llm import Echo

    return Pillchat(llm=Echo(), ledger=InMemory(), settings=Settings())


# ===== CONFIGURATION =====


def pytest_configure(config):
    """Pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
