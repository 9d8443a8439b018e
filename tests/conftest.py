"""
Shared Test Fixtures for the Prompt Feed

This module provides common fixtures used across all test modules.
Fixtures include mocks for settings, logging capture, and data factories
for authors, media and posts.
"""

import pytest
from unittest.mock import patch
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.kv_store import FlagStore, InMemoryKeyValueStore
from data.models import Author, FeedItem, MediaItem, Visibility


PRIMARY = "current-user"
BASE_FRIENDS = ["user-sarah", "user-alex", "user-jordan"]
FIXED_NOW = datetime(2025, 9, 20, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def mock_settings():
    """
    Patch the settings module with known test values.

    Usage:
        def test_something(mock_settings):
            mock_settings.DEFAULT_FEED_LIMIT = 5
            # ... test code

    Returns:
        module: The patched config.settings module.
    """
    from config import settings

    values = {
        "PRIMARY_USER_ID": PRIMARY,
        "PRIMARY_USER_NAME": "You",
        "PRIMARY_USER_HANDLE": "@you",
        "BASE_FRIEND_IDS": list(BASE_FRIENDS),
        "TODAY_PROMPT_ID": "today-prompt",
        "TODAY_PROMPT_TEXT": "what are you happy about",
        "PROMPT_LIFETIME_HOURS": 24,
        "DEFAULT_FEED_LIMIT": 30,
        "SEED_MOCK_DATA": True,
        "AMPLITUDE_HISTORY_SIZE": 30,
        "MIN_AMPLITUDE": 0.1,
        "MAX_AMPLITUDE": 1.0,
        "MIN_AUDIO_FILE_BYTES": 1000,
        "LOG_LEVEL": "INFO",
        "LOG_FILE": "",
    }
    with patch.multiple(settings, **values):
        yield settings


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    app_logger = logging.getLogger("feed")
    original_level = app_logger.level
    app_logger.setLevel(logging.DEBUG)
    app_logger.addHandler(handler)

    yield handler.records

    app_logger.removeHandler(handler)
    app_logger.setLevel(original_level)


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def flags(kv_store):
    return FlagStore(kv_store)


@pytest.fixture
def friend_graph():
    from services.friend_graph import StaticFriendGraph
    return StaticFriendGraph(BASE_FRIENDS, PRIMARY)


@pytest.fixture
def repository(friend_graph, flags):
    """An empty FeedRepository using the demo friend set."""
    from services.feed_repository import FeedRepository
    return FeedRepository(friend_graph=friend_graph, flags=flags)


@pytest.fixture
def prompts(flags, mock_settings):
    from services.prompt_service import PromptService
    return PromptService(flags=flags)


# =============================================================================
# Data Model Factories
# =============================================================================

@pytest.fixture
def author_factory():
    """
    Factory fixture for creating Author test objects.

    Usage:
        def test_author(author_factory):
            alex = author_factory("user-alex")

    Returns:
        callable: A factory function for creating Author objects.
    """
    def _create_author(uid: str = PRIMARY, name: Optional[str] = None,
                       social_handle: Optional[str] = None) -> Author:
        short = uid.split("-", 1)[-1]
        return Author(
            name=name or short.title(),
            uid=uid,
            social_handle=social_handle or f"@{short}",
        )

    return _create_author


@pytest.fixture
def post_factory(author_factory):
    """
    Factory fixture for creating FeedItem test objects.

    Posts are built directly, for seeding; use repository.create_response
    to exercise creation.

    Returns:
        callable: A factory function for creating FeedItem objects.
    """
    counter = {"n": 0}

    def _create_post(
        author_uid: str = PRIMARY,
        visibility: Visibility = Visibility.EVERYONE,
        text: str = "A small win today.",
        post_id: Optional[str] = None,
        liked_by: Optional[Iterable[str]] = None,
        created_at: Optional[datetime] = None,
        prompt_id: str = "today-prompt",
    ) -> FeedItem:
        counter["n"] += 1
        return FeedItem(
            id=post_id or f"post-{counter['n']}",
            author=author_factory(author_uid),
            prompt_id=prompt_id,
            prompt_text="what are you happy about",
            media=[MediaItem.from_text(text)],
            visibility=visibility,
            liked_by=set(liked_by or ()),
            created_at=created_at or FIXED_NOW - timedelta(minutes=counter["n"]),
        )

    return _create_post


@pytest.fixture
def scenario_posts(post_factory) -> List[FeedItem]:
    """
    A cast covering every visibility case, newest first.

    - alex-public / alex-friends: friend, both visibilities
    - emily-public: stranger, public
    - david-friends: stranger, friends-only
    - me-public / me-friends: the primary identity
    """
    return [
        post_factory("user-alex", Visibility.EVERYONE, post_id="alex-public"),
        post_factory("user-alex", Visibility.FRIENDS_ONLY, post_id="alex-friends"),
        post_factory("stranger-emily", Visibility.EVERYONE, post_id="emily-public"),
        post_factory("stranger-david", Visibility.FRIENDS_ONLY, post_id="david-friends"),
        post_factory(PRIMARY, Visibility.EVERYONE, post_id="me-public"),
        post_factory(PRIMARY, Visibility.FRIENDS_ONLY, post_id="me-friends"),
    ]


@pytest.fixture
def seeded_repository(repository, scenario_posts):
    repository.seed(scenario_posts)
    return repository

