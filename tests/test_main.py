"""
Tests for the Prompt Feed Demo Entry Point

Tests cover application wiring, the demo workflow, console rendering and
command-line handling.
"""

import pytest
from unittest.mock import MagicMock, patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import FeedApp, create_feed_app, main, parse_arguments
from data.models import FeedTab
from services.feed_repository import FeedRepository
from services.profile_service import ProfilePictureService
from utils.exceptions import ConfigurationError


# =============================================================================
# Initialization Tests
# =============================================================================

class TestFeedAppInitialization:
    """Tests for FeedApp wiring."""

    def test_services_share_flag_store(self, mock_settings):
        app = FeedApp(validate=False)

        assert app.prompts.flags is app.repository.flags
        assert app.responses.repository is app.repository
        assert app.responses.prompts is app.prompts

    def test_injected_collaborators(self, mock_settings, repository):
        profiles = MagicMock(spec=ProfilePictureService)

        app = FeedApp(repository=repository, profiles=profiles, validate=False)

        assert app.repository is repository
        assert app.profiles is profiles

    def test_validates_settings(self, mock_settings):
        with patch('main.settings.validate_settings') as mock_validate:
            FeedApp()
            mock_validate.assert_called_once()

    def test_factory(self, mock_settings):
        app = create_feed_app(validate=False)

        assert isinstance(app.repository, FeedRepository)
        assert len(app.repository) == 0


# =============================================================================
# Workflow Tests
# =============================================================================

class TestRun:
    """Tests for the demo workflow."""

    def test_seeded_friends_tab(self, mock_settings):
        app = FeedApp(validate=False)

        output = app.run("current-user", FeedTab.FRIENDS)

        assert "Alex Rivera" in output
        assert "Jordan Kim" in output
        assert "David Chen" in output
        assert "Emily Watson" not in output

    def test_unanswered_viewer_sees_blurred_text(self, mock_settings):
        app = FeedApp(validate=False)

        output = app.run("user-sarah", FeedTab.ALL)

        assert "answer today's prompt" in output
        assert "Got accepted" not in output

    def test_answering_unblurs(self, mock_settings):
        app = FeedApp(validate=False)

        output = app.run("user-sarah", FeedTab.ALL, say="Coffee with my sister")

        assert "answer today's prompt" not in output
        assert "Got accepted" in output

    def test_say_publishes_to_mine(self, mock_settings):
        app = FeedApp(validate=False)

        app.run("current-user", FeedTab.MINE, say="Warm bread")

        mine = app.repository.visible_posts
        assert len(mine) == 1
        assert mine[0].media[0].text == "Warm bread"

    def test_empty_feed(self, mock_settings):
        app = FeedApp(validate=False)

        output = app.run("current-user", FeedTab.MINE, seed=False)

        assert "No responses yet." in output

    def test_limit(self, mock_settings):
        app = FeedApp(validate=False)

        app.run("current-user", FeedTab.ALL, limit=1)

        assert len(app.repository.visible_posts) == 1

    def test_render_shows_counts(self, mock_settings):
        app = FeedApp(validate=False)
        app.seed()
        app.repository.toggle_like("friend-2", "current-user")
        app.prompts.mark_completed("current-user")

        output = app.render(app.repository.load_feed(FeedTab.ALL, "current-user"), "current-user")

        assert "5 liked, 2 comment(s)" in output


# =============================================================================
# Command Line Tests
# =============================================================================

class TestCommandLine:
    """Tests for argument parsing and the main entry point."""

    def test_defaults(self, mock_settings):
        args = parse_arguments([])

        assert args.viewer == "current-user"
        assert args.tab == "friends"
        assert args.public is False
        assert args.no_seed is False

    def test_rejects_unknown_tab(self, mock_settings):
        with pytest.raises(SystemExit):
            parse_arguments(["--tab", "everything"])

    def test_main_success(self, mock_settings, capsys):
        exit_code = main(["--viewer", "user-alex", "--tab", "friends", "--log-level", "ERROR"])

        assert exit_code == 0
        assert "David Chen" in capsys.readouterr().out

    def test_main_respects_seed_setting(self, mock_settings, capsys):
        mock_settings.SEED_MOCK_DATA = False

        exit_code = main(["--tab", "all", "--log-level", "ERROR"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Alex Rivera" not in out
        assert "No responses yet." in out

    def test_main_no_seed_flag(self, mock_settings, capsys):
        exit_code = main(["--tab", "all", "--no-seed", "--log-level", "ERROR"])

        assert exit_code == 0
        assert "No responses yet." in capsys.readouterr().out

    def test_main_configuration_error(self, mock_settings):
        with patch('main.create_feed_app', side_effect=ConfigurationError("bad")):
            assert main(["--log-level", "ERROR"]) == 1

    def test_main_unexpected_error(self, mock_settings):
        with patch('main.create_feed_app', side_effect=RuntimeError("boom")):
            assert main(["--log-level", "ERROR"]) == 2
