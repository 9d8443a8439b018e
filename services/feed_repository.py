"""
Feed Repository Module

This module holds the in-memory store of prompt responses and the rules
that decide which of them a viewer sees under each feed tab. It also
handles like and comment state for posts and comments.

All posts live in one newest-first master list. The last computed view is
cached as references to the same post objects, so a mutation made through
either list is visible through both.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from data.kv_store import COMMENT_LIKE, FlagStore
from data.models import Author, Comment, FeedItem, FeedTab, MediaItem, Visibility
from data.protocols import FriendGraph
from services.friend_graph import StaticFriendGraph
from utils.exceptions import CommentNotFoundError, PostNotFoundError, UnauthorizedError
from utils.helpers import truncate_text
from utils.logger import get_logger

logger = get_logger(__name__)


def is_visible(post: FeedItem, tab: FeedTab, viewer_id: str, friend_graph: FriendGraph) -> bool:
    """
    Decide whether a post appears for viewer_id under tab.

    - MINE: the viewer's own posts.
    - ALL: other people's posts published to everyone.
    - FRIENDS: other people's posts that are either by a friend (any
      visibility) or published friends-only (by anyone).

    The FRIENDS rule deliberately shows friends-only posts from strangers;
    it models social adjacency for the demo cast, not an access control list.
    """
    author_id = post.author.uid
    if tab == FeedTab.MINE:
        return author_id == viewer_id
    if author_id == viewer_id:
        return False
    if tab == FeedTab.ALL:
        return post.visibility == Visibility.EVERYONE
    if tab == FeedTab.FRIENDS:
        return friend_graph.is_friend(viewer_id, author_id) or post.visibility == Visibility.FRIENDS_ONLY
    raise ValueError(f"Unknown feed tab: {tab!r}")


class FeedRepository:
    """In-memory feed of prompt responses with per-viewer filtering."""

    def __init__(self, friend_graph: Optional[FriendGraph] = None, flags: Optional[FlagStore] = None):
        """
        Initialize an empty repository.

        Args:
            friend_graph: Friend relation used by the Friends tab. Defaults to
                the configured StaticFriendGraph.
            flags: Flag storage for comment likes. Defaults to a fresh
                in-memory store.
        """
        self.friend_graph = friend_graph if friend_graph is not None else StaticFriendGraph()
        self.flags = flags if flags is not None else FlagStore()
        self._posts: List[FeedItem] = []
        self._visible: List[FeedItem] = []
        self.current_tab: Optional[FeedTab] = None
        self.current_viewer: Optional[str] = None

    def __len__(self) -> int:
        return len(self._posts)

    @property
    def all_posts(self) -> List[FeedItem]:
        """Master list, newest first."""
        return list(self._posts)

    @property
    def visible_posts(self) -> List[FeedItem]:
        """The view produced by the last load_feed call."""
        return list(self._visible)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_post(self, post_id: str) -> Optional[FeedItem]:
        for post in self._posts:
            if post.id == post_id:
                return post
        for post in self._visible:
            if post.id == post_id:
                return post
        return None

    def _find_comment(self, comment_id: str) -> Tuple[Optional[FeedItem], Optional[Comment]]:
        for post in self._posts:
            comment = post.find_comment(comment_id)
            if comment is not None:
                return post, comment
        return None, None

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def create_response(
        self,
        prompt_id: str,
        prompt_text: str,
        media: Sequence[MediaItem],
        author: Author,
        visibility: Visibility
    ) -> FeedItem:
        """
        Create a post and add it to the front of the master list.

        The post is not added to the current view, because whether it is
        visible depends on the viewer. Call load_feed to refresh the view.

        Args:
            prompt_id: Id of the prompt being answered.
            prompt_text: Text of the prompt being answered.
            media: Text and/or audio attachments. May be empty.
            author: Who is posting.
            visibility: EVERYONE or FRIENDS_ONLY.

        Returns:
            FeedItem: The new post.
        """
        post = FeedItem(
            author=author,
            prompt_id=prompt_id,
            prompt_text=prompt_text,
            media=list(media),
            visibility=Visibility(visibility),
        )
        self._posts.insert(0, post)

        logger.info(f"Created response {post.id} by {author.name} ({author.uid}), "
                    f"visibility={post.visibility.value}, media={len(post.media)}")
        for index, item in enumerate(post.media):
            logger.debug(f"  Media {index}: {item.kind.value} - {truncate_text(item.describe())}")
        logger.debug(f"Total posts: {len(self._posts)}")
        return post

    def delete_response(self, post_id: str, requesting_user_id: str) -> None:
        """
        Delete a post owned by the requesting user.

        Args:
            post_id: Id of the post to delete.
            requesting_user_id: Id of the user asking for the deletion.

        Raises:
            PostNotFoundError: If no post has this id.
            UnauthorizedError: If the requesting user is not the author.
        """
        post = next((p for p in self._posts if p.id == post_id), None)
        if post is None:
            logger.warning(f"Post {post_id} not found for deletion")
            raise PostNotFoundError(f"Post not found: {post_id}")

        if post.author.uid != requesting_user_id:
            logger.warning(f"User {requesting_user_id} cannot delete post by {post.author.uid}")
            raise UnauthorizedError(f"User {requesting_user_id} is not the author of post {post_id}")

        self._posts = [p for p in self._posts if p is not post]
        if any(p is post for p in self._visible):
            self._visible = [p for p in self._visible if p is not post]
            logger.debug("Removed from current feed display")
        logger.info(f"Deleted post {post_id} by {post.author.name}. Remaining posts: {len(self._posts)}")

    # -------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------

    def compute_view(self, tab: FeedTab, viewer_id: str, limit: Optional[int] = None) -> List[FeedItem]:
        """
        Posts visible to viewer_id under tab, newest first. No side effects.

        Args:
            tab: ALL, FRIENDS or MINE.
            viewer_id: Identity the view is computed for.
            limit: Keep at most this many posts. None keeps all of them.

        Returns:
            List[FeedItem]: The filtered posts.
        """
        tab = FeedTab(tab)
        view = [post for post in self._posts if is_visible(post, tab, viewer_id, self.friend_graph)]
        if limit is not None:
            view = view[:max(limit, 0)]
        return view

    def load_feed(self, tab: FeedTab, viewer_id: str, limit: Optional[int] = None) -> List[FeedItem]:
        """
        Compute the view for viewer_id under tab and make it the current view.

        Args:
            tab: ALL, FRIENDS or MINE.
            viewer_id: Identity the view is computed for.
            limit: Keep at most this many posts. None keeps all of them.

        Returns:
            List[FeedItem]: The filtered posts, newest first.
        """
        tab = FeedTab(tab)
        logger.debug(f"Loading feed with filter {tab.value} for viewer '{viewer_id}'")

        if logger.isEnabledFor(logging.DEBUG):
            for post in self._posts:
                if post.author.uid == viewer_id:
                    relationship = "YOU"
                elif self.friend_graph.is_friend(viewer_id, post.author.uid):
                    relationship = "FRIEND"
                else:
                    relationship = "STRANGER"
                logger.debug(f"  - {post.author.name} ({post.author.uid}) - {relationship} "
                             f"- visibility: {post.visibility.value}")

        self._visible = self.compute_view(tab, viewer_id, limit)
        self.current_tab = tab
        self.current_viewer = viewer_id

        logger.info(f"Showing {len(self._visible)} {tab.value} post(s) for {viewer_id}")
        return list(self._visible)

    # -------------------------------------------------------------------------
    # Likes
    # -------------------------------------------------------------------------

    def toggle_like(self, post_id: str, viewer_id: str) -> None:
        """Like or unlike a post for viewer_id. Unknown post ids are ignored."""
        post = self.get_post(post_id)
        if post is None:
            logger.debug(f"toggle_like: post {post_id} not found")
            return

        if viewer_id in post.liked_by:
            post.liked_by.discard(viewer_id)
            logger.debug(f"{viewer_id} unliked post {post_id}, new count: {post.like_count}")
        else:
            post.liked_by.add(viewer_id)
            logger.debug(f"{viewer_id} liked post {post_id}, new count: {post.like_count}")
        post.touch()

    def has_liked(self, post_id: str, viewer_id: str) -> bool:
        post = self.get_post(post_id)
        return post is not None and viewer_id in post.liked_by

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def add_comment(self, post_id: str, author: Author, text: str) -> Optional[Comment]:
        """
        Append a comment to a post.

        Args:
            post_id: Id of the post being commented on.
            author: Who is commenting.
            text: Comment body.

        Returns:
            Comment: The new comment, or None if the post does not exist.
        """
        post = self.get_post(post_id)
        if post is None:
            logger.debug(f"add_comment: post {post_id} not found")
            return None

        comment = Comment(author=author, text=text)
        post.comments.append(comment)
        post.touch(comment.created_at)
        logger.info(f"{author.name} commented on post {post_id} ({post.comment_count} comment(s))")
        return comment

    def delete_comment(self, comment_id: str, requesting_user_id: str) -> None:
        """
        Delete a comment owned by the requesting user.

        Any stored "liked" flags for the comment are removed as well.

        Args:
            comment_id: Id of the comment to delete.
            requesting_user_id: Id of the user asking for the deletion.

        Raises:
            CommentNotFoundError: If no post has a comment with this id.
            UnauthorizedError: If the requesting user is not the comment author.
        """
        post, comment = self._find_comment(comment_id)
        if comment is None:
            logger.warning(f"Comment {comment_id} not found for deletion")
            raise CommentNotFoundError(f"Comment not found: {comment_id}")

        if comment.author.uid != requesting_user_id:
            logger.warning(f"User {requesting_user_id} cannot delete comment by {comment.author.uid}")
            raise UnauthorizedError(f"User {requesting_user_id} is not the author of comment {comment_id}")

        post.comments.remove(comment)
        self.flags.purge(COMMENT_LIKE, comment_id)
        logger.info(f"Deleted comment {comment_id} from post {post.id} ({post.comment_count} remaining)")

    def toggle_comment_like(self, comment_id: str, viewer_id: str) -> None:
        """Like or unlike a comment for viewer_id. Unknown comment ids are ignored."""
        _, comment = self._find_comment(comment_id)
        if comment is None:
            logger.debug(f"toggle_comment_like: comment {comment_id} not found")
            return

        was_liked = self.flags.is_set(COMMENT_LIKE, comment_id, viewer_id)
        if was_liked:
            comment.like_count = max(0, comment.like_count - 1)
        else:
            comment.like_count += 1
        self.flags.set_flag(COMMENT_LIKE, comment_id, viewer_id, not was_liked)
        logger.debug(f"Comment {comment_id} {'unliked' if was_liked else 'liked'} by {viewer_id}: "
                     f"{comment.like_count}")

    def has_liked_comment(self, comment_id: str, viewer_id: str) -> bool:
        return self.flags.is_set(COMMENT_LIKE, comment_id, viewer_id)

    def fetch_comments(self, post_id: str) -> List[Comment]:
        """Comments of a post in chronological order, or an empty list if the post is unknown."""
        post = self.get_post(post_id)
        if post is None:
            return []
        return list(post.comments)

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def seed(self, posts: Sequence[FeedItem]) -> None:
        """
        Replace the contents with the given posts, in the given order.

        The current view is set to all of them, as if nothing had been
        filtered yet.
        """
        ids = [post.id for post in posts]
        if len(set(ids)) != len(ids):
            raise ValueError("Seed posts must have unique ids")
        self._posts = list(posts)
        self._visible = list(posts)
        self.current_tab = None
        self.current_viewer = None
        logger.info(f"Seeded {len(self._posts)} post(s)")
