"""
Profile Picture Service Module

Cached access to users' profile pictures. Remote storage is not wired up,
so the default lookup never finds a picture.
"""

from typing import Dict, Optional

from data.protocols import ProfilePictureLookup
from utils.logger import get_logger

logger = get_logger(__name__)


class MockProfilePictureLookup:
    """ProfilePictureLookup that has no pictures."""

    def fetch(self, user_id: str) -> Optional[bytes]:
        return None


class ProfilePictureService:
    """Profile picture lookup with an in-memory cache of found pictures."""

    def __init__(self, lookup: Optional[ProfilePictureLookup] = None):
        self.lookup = lookup if lookup is not None else MockProfilePictureLookup()
        self._cache: Dict[str, bytes] = {}

    def get(self, user_id: str) -> Optional[bytes]:
        """
        Get a user's profile picture.

        Only pictures that were found are cached; a miss is retried on the
        next call.

        Args:
            user_id: The user whose picture is wanted.

        Returns:
            Optional[bytes]: Image bytes, or None if the user has no picture.
        """
        cached = self._cache.get(user_id)
        if cached is not None:
            return cached

        picture = self.lookup.fetch(user_id)
        if picture is not None:
            self._cache[user_id] = picture
            logger.debug(f"Cached profile picture for {user_id}")
        return picture

    def is_cached(self, user_id: str) -> bool:
        return user_id in self._cache

    def clear(self) -> None:
        self._cache.clear()
