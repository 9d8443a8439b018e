"""
Friend Graph Module

The friend relation consulted by the Friends feed tab. The default graph is
a fixed set of friend ids shared by every viewer, plus one reciprocity rule:
anyone other than the primary identity counts the primary identity as a
friend. This models "when you view the feed as someone else, you are their
friend too" for perspective switching in the demo cast.
"""

from typing import Iterable, Optional, Set

from config import settings


class StaticFriendGraph:
    """FriendGraph backed by a fixed id set and the honorary-friend rule."""

    def __init__(self, base_friend_ids: Optional[Iterable[str]] = None,
                 primary_user_id: Optional[str] = None):
        if base_friend_ids is None:
            base_friend_ids = settings.BASE_FRIEND_IDS
        self.base_friend_ids = frozenset(base_friend_ids)
        self.primary_user_id = primary_user_id if primary_user_id is not None else settings.PRIMARY_USER_ID

    def friends_of(self, viewer_id: str) -> Set[str]:
        friends = set(self.base_friend_ids)
        if viewer_id != self.primary_user_id:
            friends.add(self.primary_user_id)
        return friends

    def is_friend(self, viewer_id: str, other_id: str) -> bool:
        if other_id in self.base_friend_ids:
            return True
        return viewer_id != self.primary_user_id and other_id == self.primary_user_id
