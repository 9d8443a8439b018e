"""
Mock Data Module

Demo cast and seed posts for the feed. Sarah has not answered today's
prompt, so she has no post and sees the feed blurred; everyone else who
posted has answered it.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from config import settings
from data.kv_store import COMMENT_LIKE
from data.models import Author, Comment, FeedItem, MediaItem, MediaKind, Visibility
from services.feed_repository import FeedRepository
from services.prompt_service import PromptService
from utils.helpers import utc_now
from utils.logger import get_logger

logger = get_logger(__name__)

# Identities that can be switched to in the demo, in display order
AVAILABLE_USERS: List[Tuple[str, str]] = [
    ("current-user", "You"),
    ("user-sarah", "Sarah Chen"),
    ("user-alex", "Alex Rivera"),
    ("user-jordan", "Jordan Kim"),
]

ALEX = Author(name="Alex Rivera", uid="user-alex", social_handle="@alex_r")
JORDAN = Author(name="Jordan Kim", uid="user-jordan", social_handle="@jordan_k")
EMILY = Author(name="Emily Watson", uid="stranger-emily", social_handle="@emily_w")
MARK = Author(name="Mark Johnson", uid="stranger-mark", social_handle="@mark_j")
DAVID = Author(name="David Chen", uid="stranger-david", social_handle="@david_c")

ANSWERED_USERS = ["user-alex", "user-jordan", "stranger-emily", "stranger-mark", "stranger-david"]


def display_name(user_id: str) -> str:
    for uid, name in AVAILABLE_USERS:
        if uid == user_id:
            return name
    return "Unknown"


def author_for(user_id: str) -> Author:
    """
    Author record for a switchable identity.

    The primary identity posts as "@you"; others use their id without the
    "user-" prefix as the handle.
    """
    if user_id == settings.PRIMARY_USER_ID:
        return Author(name=settings.PRIMARY_USER_NAME, uid=user_id, social_handle=settings.PRIMARY_USER_HANDLE)
    handle = "@" + user_id.replace("user-", "")
    return Author(name=display_name(user_id), uid=user_id, social_handle=handle)


def build_mock_posts(now: Optional[datetime] = None) -> List[FeedItem]:
    """Seed posts, newest first in master-list order as listed."""
    now = now or utc_now()
    prompt_id = settings.TODAY_PROMPT_ID
    prompt_text = settings.TODAY_PROMPT_TEXT

    def ago(**delta) -> datetime:
        return now - timedelta(**delta)

    return [
        # Public post from a friend: shows in both All and Friends
        FeedItem(
            id="friend-2",
            author=ALEX,
            prompt_id=prompt_id,
            prompt_text=prompt_text,
            media=[MediaItem.from_text(
                "Got accepted into my dream graduate program! Still can't believe it's real. "
                "All those late study nights finally paid off."
            )],
            visibility=Visibility.EVERYONE,
            liked_by={"user-maya", "user-david", "user-tom", "user-jordan"},
            comments=[
                Comment(id="comment-3",
                        author=Author(name="Maya", uid="user-maya", social_handle="@maya_p"),
                        text="CONGRATULATIONS!! This is huge!",
                        created_at=ago(hours=1)),
                Comment(id="comment-4",
                        author=Author(name="David", uid="user-david", social_handle="@david_l"),
                        text="You totally deserve this! Your hard work shows",
                        created_at=ago(minutes=45)),
            ],
            created_at=ago(hours=4),
            last_activity_at=ago(minutes=45),
        ),
        # Friends-only post from a friend: hidden from All
        FeedItem(
            id="friend-3",
            author=JORDAN,
            prompt_id=prompt_id,
            prompt_text=prompt_text,
            media=[
                MediaItem.from_text(
                    "Just had the most amazing conversation with my grandmother about her childhood stories."
                ),
                MediaItem(kind=MediaKind.AUDIO, url="file://mock-audio-jordan.m4a"),
            ],
            visibility=Visibility.FRIENDS_ONLY,
            liked_by={"user-emma", "user-alex"},
            comments=[
                Comment(id="comment-5",
                        author=Author(name="Emma", uid="user-emma", social_handle="@emma_w"),
                        text="Family stories are the best treasures",
                        created_at=ago(minutes=20)),
            ],
            created_at=ago(hours=6),
            last_activity_at=ago(minutes=20),
        ),
        FeedItem(
            id="stranger-1",
            author=EMILY,
            prompt_id=prompt_id,
            prompt_text=prompt_text,
            media=[MediaItem.from_text(
                "Just started my new job today! Excited for this new chapter and all the opportunities ahead."
            )],
            visibility=Visibility.EVERYONE,
            liked_by={f"random-{n}" for n in range(1, 16)},
            comments=[
                Comment(id="comment-6",
                        author=Author(name="Random User", uid="random-1", social_handle="@random1"),
                        text="Congratulations on the new job!",
                        created_at=ago(minutes=25)),
            ],
            created_at=ago(hours=1),
            last_activity_at=ago(minutes=25),
        ),
        FeedItem(
            id="stranger-2",
            author=MARK,
            prompt_id=prompt_id,
            prompt_text=prompt_text,
            media=[MediaItem.from_text(
                "Finally finished reading my first novel in years! "
                "There's something magical about getting lost in a good story."
            )],
            visibility=Visibility.EVERYONE,
            liked_by={f"random-{n}" for n in range(4, 12)},
            created_at=ago(hours=3),
        ),
        # Friends-only post from a stranger: shows in Friends, not in All
        FeedItem(
            id="stranger-3",
            author=DAVID,
            prompt_id=prompt_id,
            prompt_text=prompt_text,
            media=[MediaItem.from_text(
                "Having a tough day but trying to stay positive. "
                "My therapy session really helped me process some difficult emotions."
            )],
            visibility=Visibility.FRIENDS_ONLY,
            liked_by={f"random-{n}" for n in range(6, 11)},
            comments=[
                Comment(id="comment-7",
                        author=Author(name="Support Friend", uid="random-6", social_handle="@support"),
                        text="Sending you love and strength!",
                        created_at=ago(minutes=40),
                        like_count=1),
            ],
            created_at=ago(hours=5),
            last_activity_at=ago(minutes=40),
        ),
    ]


def load_mock_data(repository: FeedRepository, prompts: PromptService,
                   now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Reset flags and fill the repository with the demo posts.

    Args:
        repository: Repository to seed.
        prompts: Prompt service whose completion flags are reset.
        now: Reference time for the relative post timestamps.

    Returns:
        dict: Counts of cleared flags and seeded posts.
    """
    cleared_likes = repository.flags.clear(COMMENT_LIKE)
    cleared_completions = prompts.reset()

    for user_id in ANSWERED_USERS:
        prompts.mark_completed(user_id, settings.TODAY_PROMPT_ID)

    posts = build_mock_posts(now)
    repository.seed(posts)

    logger.info(f"Mock data created: {len(posts)} posts loaded")
    logger.info("Sarah Chen has not answered the prompt and will see blurred content")
    return {
        "cleared_comment_likes": cleared_likes,
        "cleared_completions": cleared_completions,
        "posts": len(posts),
    }
