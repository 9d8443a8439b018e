"""
Prompt Service Module

This module tracks the daily prompt and which viewers have answered it.
Viewers who have not answered today's prompt see the feed blurred.
"""

from datetime import datetime
from typing import Optional

from config import settings
from data.kv_store import PROMPT_COMPLETED, FlagStore
from data.models import Prompt
from utils.logger import get_logger

logger = get_logger(__name__)


class PromptService:
    """Daily prompt and the per-viewer "answered" gate."""

    def __init__(self, flags: Optional[FlagStore] = None, prompt: Optional[Prompt] = None):
        """
        Initialize the prompt service.

        Args:
            flags: Flag storage for completion state. Share it with the feed
                repository to keep all flags in one store.
            prompt: Today's prompt. Defaults to the configured prompt.
        """
        self.flags = flags if flags is not None else FlagStore()
        self.todays_prompt = prompt or Prompt.issued_now(
            settings.TODAY_PROMPT_ID,
            settings.TODAY_PROMPT_TEXT,
            settings.PROMPT_LIFETIME_HOURS
        )

    def _prompt_id(self, prompt_id: Optional[str]) -> str:
        return prompt_id or self.todays_prompt.id

    def refresh(self, at: Optional[datetime] = None) -> bool:
        """
        Reissue today's prompt once it has expired.

        Completion flags belong to the expired round, so they are cleared and
        every viewer has to answer again.

        Returns:
            bool: True if a new prompt was issued.
        """
        current = self.todays_prompt
        if not current.is_expired(at):
            return False

        lifetime = current.expires_at - current.created_at
        self.todays_prompt = Prompt.issued_now(
            current.id, current.text, lifetime.total_seconds() / 3600, now=at
        )
        removed = self.reset()
        logger.info(f"Prompt {current.id} expired; reissued and cleared {removed} completion(s)")
        return True

    def mark_completed(self, viewer_id: str, prompt_id: Optional[str] = None) -> None:
        prompt_id = self._prompt_id(prompt_id)
        self.flags.set_flag(PROMPT_COMPLETED, viewer_id, prompt_id)
        logger.info(f"Prompt {prompt_id} marked as completed for {viewer_id}")

    def has_completed(self, viewer_id: str, prompt_id: Optional[str] = None) -> bool:
        return self.flags.is_set(PROMPT_COMPLETED, viewer_id, self._prompt_id(prompt_id))

    def should_blur(self, viewer_id: str, prompt_id: Optional[str] = None,
                    at: Optional[datetime] = None) -> bool:
        """True while viewer_id has not answered the prompt. Rolls today's prompt over first."""
        if prompt_id is None:
            self.refresh(at)
        return not self.has_completed(viewer_id, prompt_id)

    def reset(self) -> int:
        """Forget every completion flag. Returns the number removed."""
        removed = self.flags.clear(PROMPT_COMPLETED)
        logger.debug(f"Cleared {removed} prompt completion flag(s)")
        return removed
