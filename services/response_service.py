"""
Response Service Module

This module turns a finished recording into a feed post: it builds the
media list from the transcript and the recorded audio file, marks today's
prompt as answered for the viewer and publishes the response.
"""

from typing import List, Optional

from data.models import FeedItem, MediaItem, Visibility
from data.protocols import Recorder
from services.feed_repository import FeedRepository
from services.mock_data import author_for
from services.prompt_service import PromptService
from services.recorder import require_audio_file
from utils.exceptions import InvalidAudioError
from utils.logger import get_logger

logger = get_logger(__name__)


class ResponseService:
    """Publishes recorded answers to today's prompt."""

    def __init__(self, repository: FeedRepository, prompts: PromptService):
        self.repository = repository
        self.prompts = prompts

    def build_media(self, transcript: Optional[str], audio_path: Optional[str] = None,
                    include_audio: bool = True) -> List[MediaItem]:
        """
        Media attachments for a response.

        A text item is added for a non-blank transcript. The audio file is
        attached only when requested and valid; an invalid file is dropped.
        """
        media = []
        if transcript and transcript.strip():
            media.append(MediaItem.from_text(transcript))
            logger.debug("Added text media")

        if include_audio and audio_path:
            try:
                media.append(MediaItem.from_audio(require_audio_file(audio_path)))
                logger.debug(f"Added audio media: {audio_path}")
            except InvalidAudioError as e:
                logger.warning(f"Discarding audio: {e}")
        else:
            logger.debug("Audio not included")

        return media

    def publish(
        self,
        viewer_id: str,
        transcript: Optional[str],
        audio_path: Optional[str] = None,
        include_audio: bool = True,
        make_public: bool = False
    ) -> FeedItem:
        """
        Publish a response to today's prompt as viewer_id.

        Args:
            viewer_id: Identity the response is posted as.
            transcript: Transcribed or typed answer.
            audio_path: Recorded audio file, if any.
            include_audio: Whether to attach the audio file.
            make_public: Publish to everyone instead of friends only.

        Returns:
            FeedItem: The created post.
        """
        media = self.build_media(transcript, audio_path, include_audio)
        author = author_for(viewer_id)
        prompt = self.prompts.todays_prompt

        self.prompts.mark_completed(viewer_id, prompt.id)

        return self.repository.create_response(
            prompt_id=prompt.id,
            prompt_text=prompt.text,
            media=media,
            author=author,
            visibility=Visibility.EVERYONE if make_public else Visibility.FRIENDS_ONLY,
        )

    def publish_recording(self, viewer_id: str, recorder: Recorder, include_audio: bool = True,
                          make_public: bool = False) -> FeedItem:
        """Stop the recorder and publish its transcript and audio file."""
        recorder.stop()
        audio_path = recorder.stop_recording_to_file() if include_audio else None
        return self.publish(
            viewer_id,
            recorder.transcript,
            audio_path=audio_path,
            include_audio=include_audio,
            make_public=make_public,
        )
