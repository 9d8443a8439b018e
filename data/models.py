"""
Data Models for the Prompt Feed

This module contains data classes and enums used throughout the application:
authors, media attachments, comments, feed posts and the daily prompt.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Set

from utils.helpers import utc_now


def new_id() -> str:
    """Fresh unique identifier for posts, comments and media."""
    return str(uuid.uuid4())


class Visibility(str, Enum):
    """Audience a response is published to."""
    EVERYONE = "everyone"
    FRIENDS_ONLY = "friends"


class MediaKind(str, Enum):
    TEXT = "text"
    AUDIO = "audio"
    IMAGE = "image"
    VIDEO = "video"


class FeedTab(str, Enum):
    """The three feed views, each with its own filtering predicate."""
    ALL = "all"
    FRIENDS = "friends"
    MINE = "mine"


@dataclass(frozen=True)
class Author:
    """Who created a post or comment."""
    name: str
    uid: str
    social_handle: str                 # e.g. "@alex_r"


@dataclass(frozen=True)
class MediaItem:
    """One attachment of a response. Text items use text, the others use url."""
    kind: MediaKind
    text: Optional[str] = None
    url: Optional[str] = None          # file path or URL of the resource
    id: str = field(default_factory=new_id)

    @classmethod
    def from_text(cls, text: str) -> "MediaItem":
        return cls(kind=MediaKind.TEXT, text=text)

    @classmethod
    def from_audio(cls, url: str) -> "MediaItem":
        return cls(kind=MediaKind.AUDIO, url=url)

    def describe(self) -> str:
        """Short label used in log lines."""
        if self.kind == MediaKind.TEXT:
            return self.text or "nil"
        if self.url:
            return self.url.replace("\\", "/").rsplit("/", 1)[-1]
        return "nil"


@dataclass
class Comment:
    """A comment on a post. like_count is tracked per (comment, viewer) flag."""
    author: Author
    text: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    like_count: int = 0


# Fields of FeedItem that may not change once the post exists
IMMUTABLE_POST_FIELDS = frozenset({"id", "author", "prompt_id", "prompt_text", "visibility", "created_at"})


@dataclass
class FeedItem:
    """
    One answer to a prompt, as stored in the feed repository.

    like_count and comment_count are derived from liked_by and comments,
    so they always agree with them.
    """
    author: Author
    prompt_id: str
    prompt_text: str
    media: List[MediaItem] = field(default_factory=list)
    visibility: Visibility = Visibility.FRIENDS_ONLY
    id: str = field(default_factory=new_id)
    liked_by: Set[str] = field(default_factory=set)
    comments: List[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    last_activity_at: Optional[datetime] = None

    def __setattr__(self, name, value):
        if name in IMMUTABLE_POST_FIELDS and name in self.__dict__:
            raise AttributeError(f"FeedItem.{name} cannot be changed after creation")
        super().__setattr__(name, value)

    @property
    def like_count(self) -> int:
        return len(self.liked_by)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None

    def touch(self, when: Optional[datetime] = None) -> None:
        """Record like/comment activity on the post."""
        self.last_activity_at = when or utc_now()


@dataclass(frozen=True)
class Prompt:
    """The daily question users respond to."""
    id: str
    text: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def issued_now(cls, prompt_id: str, text: str, lifetime_hours: float = 24,
                   now: Optional[datetime] = None) -> "Prompt":
        now = now or utc_now()
        return cls(id=prompt_id, text=text, created_at=now, expires_at=now + timedelta(hours=lifetime_hours))

    def is_expired(self, at: Optional[datetime] = None) -> bool:
        return (at or utc_now()) >= self.expires_at
