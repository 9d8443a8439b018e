"""
Prompt Feed Demo

This is the main entry point for the Prompt Feed demo. It seeds the feed
with the demo cast, optionally publishes a response as the chosen viewer,
and prints the feed tab that viewer would see.
"""

import sys
import argparse
import logging
from typing import List, Optional

from config import settings
from data.kv_store import FlagStore
from data.models import FeedItem, FeedTab, MediaKind
from services.feed_repository import FeedRepository
from services.friend_graph import StaticFriendGraph
from services.mock_data import AVAILABLE_USERS, load_mock_data
from services.profile_service import ProfilePictureService
from services.prompt_service import PromptService
from services.recorder import ScriptedRecorder
from services.response_service import ResponseService
from utils.exceptions import ConfigurationError, FeedError
from utils.helpers import truncate_text
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)


class FeedApp:
    """
    Application container for the feed.

    Holds the repository and the services around it, all sharing one flag
    store, the way the app's state container does for its views.
    """

    def __init__(
        self,
        repository: Optional[FeedRepository] = None,
        prompts: Optional[PromptService] = None,
        profiles: Optional[ProfilePictureService] = None,
        validate: bool = True
    ):
        """
        Initialize the feed application.

        Args:
            repository: Feed repository; a new one is built if not provided.
            prompts: Prompt service; built on the repository's flag store if not provided.
            profiles: Profile picture service; uses the mock lookup if not provided.
            validate: Whether to validate settings on startup.
        """
        if validate:
            settings.validate_settings()

        if repository is None:
            repository = FeedRepository(
                friend_graph=StaticFriendGraph(settings.BASE_FRIEND_IDS, settings.PRIMARY_USER_ID),
                flags=FlagStore(),
            )
        self.repository = repository
        self.prompts = prompts or PromptService(flags=repository.flags)
        self.profiles = profiles or ProfilePictureService()
        self.responses = ResponseService(self.repository, self.prompts)

    def seed(self) -> None:
        load_mock_data(self.repository, self.prompts)

    def respond(self, viewer_id: str, text: str, audio_path: Optional[str] = None,
                make_public: bool = False) -> FeedItem:
        """Record (from text) and publish a response as viewer_id."""
        recorder = ScriptedRecorder(audio_path=audio_path)
        recorder.start(transcribe=True)
        recorder.start_recording_to_file()
        recorder.feed(text)
        return self.responses.publish_recording(
            viewer_id, recorder, include_audio=audio_path is not None, make_public=make_public
        )

    def render(self, posts: List[FeedItem], viewer_id: str) -> str:
        """Plain-text rendering of a feed for the console."""
        blurred = self.prompts.should_blur(viewer_id)
        lines = [f"Prompt: {self.prompts.todays_prompt.text}"]
        if blurred:
            lines.append("(answer today's prompt to see responses clearly)")

        if not posts:
            lines.append("No responses yet.")

        for post in posts:
            avatar = "[pic]" if self.profiles.get(post.author.uid) is not None else "[ ]"
            lines.append(f"{avatar} {post.author.name} {post.author.social_handle} [{post.visibility.value}]")
            for item in post.media:
                if item.kind == MediaKind.TEXT:
                    body = truncate_text(item.text, 60) or ""
                    lines.append(f"    {'*' * len(body) if blurred else body}")
                else:
                    lines.append(f"    <{item.kind.value}: {item.describe()}>")
            liked = "liked" if self.repository.has_liked(post.id, viewer_id) else "likes"
            lines.append(f"    {post.like_count} {liked}, {post.comment_count} comment(s)")
        return "\n".join(lines)

    def run(self, viewer_id: str, tab: FeedTab, limit: Optional[int] = None,
            say: Optional[str] = None, audio_path: Optional[str] = None,
            make_public: bool = False, seed: bool = True) -> str:
        """
        Run the demo workflow.

        Args:
            viewer_id: Identity to view the feed as.
            tab: Feed tab to show.
            limit: Maximum number of posts to show.
            say: If given, publish this text as viewer_id first.
            audio_path: Audio file to attach to the published response.
            make_public: Publish to everyone instead of friends only.
            seed: Load the demo posts first.

        Returns:
            str: The rendered feed.
        """
        if seed:
            self.seed()

        if say:
            post = self.respond(viewer_id, say, audio_path=audio_path, make_public=make_public)
            logger.info(f"Published response {post.id} as {viewer_id}")

        posts = self.repository.load_feed(tab, viewer_id, limit)
        return self.render(posts, viewer_id)


def create_feed_app(validate: bool = True) -> FeedApp:
    """Factory for a FeedApp with default collaborators."""
    return FeedApp(validate=validate)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    user_ids = [uid for uid, _ in AVAILABLE_USERS]
    parser = argparse.ArgumentParser(description='Prompt Feed Demo')
    parser.add_argument('--viewer', type=str, default=settings.PRIMARY_USER_ID,
                        help=f'Identity to view the feed as (demo cast: {", ".join(user_ids)})')
    parser.add_argument('--tab', type=str, choices=[t.value for t in FeedTab], default=FeedTab.FRIENDS.value,
                        help='Feed tab to show')
    parser.add_argument('--limit', type=int, default=settings.DEFAULT_FEED_LIMIT,
                        help='Maximum number of posts to show')
    parser.add_argument('--say', type=str, default=None,
                        help='Publish this answer to today\'s prompt before showing the feed')
    parser.add_argument('--audio', type=str, default=None, help='Audio file to attach to --say')
    parser.add_argument('--public', action='store_true', help='Publish --say to everyone')
    parser.add_argument('--no-seed', action='store_true',
                        help='Start with an empty feed (also set by SEED_MOCK_DATA=false)')
    parser.add_argument('--log-file', type=str, default=settings.LOG_FILE or None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=settings.LOG_LEVEL if settings.LOG_LEVEL in ('DEBUG', 'INFO', 'WARNING', 'ERROR')
                        else 'INFO',
                        help='Logging level')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the application."""
    # Parse command line arguments
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    logger.info(f"Starting Prompt Feed demo as {args.viewer} ({args.tab} tab)")

    try:
        app = create_feed_app()
        output = app.run(
            viewer_id=args.viewer,
            tab=FeedTab(args.tab),
            limit=args.limit,
            say=args.say,
            audio_path=args.audio,
            make_public=args.public,
            seed=settings.SEED_MOCK_DATA and not args.no_seed,
        )
        print(output)
        exit_code = 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        exit_code = 1
    except FeedError as e:
        logger.error(f"Feed error: {e}", exc_info=True)
        exit_code = 2
    except Exception as e:
        logger.error(f"Unhandled exception in Prompt Feed: {e}", exc_info=True)
        exit_code = 2

    logger.info(f"Prompt Feed demo finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
