"""Pytest configuration and shared fixtures."""
import os

import pytest

from mentorchat.conversation import ConversationStore, Profile, TopicPreferences
from mentorchat.storage import InMemoryStorage


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY")
    }


@pytest.fixture
def storage():
    """Empty in-memory key-value storage."""
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    """Conversation store over empty in-memory storage."""
    return ConversationStore(storage)


@pytest.fixture
def sample_profile():
    """A filled-in founder profile."""
    return Profile(
        fullname="Ada Lovelace",
        email="ada@example.com",
        role="CEO",
        startup="Engine Labs",
        stage="pre-seed",
        industry="devtools",
        description="Analytical tooling for small teams.",
        prefs=TopicPreferences(funding=True, marketing=True),
    )
