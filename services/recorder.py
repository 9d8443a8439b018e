"""
Recorder Support Module

Helpers around the device recorder: the bounded amplitude history shown
while recording, the audio-file validity check, and ScriptedRecorder, a
Recorder that replays text and levels fed to it (used by the command-line
demo and the tests in place of a microphone).
"""

from collections import deque
from typing import Iterable, List, Optional

from config import settings
from utils.exceptions import InvalidAudioError
from utils.helpers import file_size
from utils.logger import get_logger

logger = get_logger(__name__)


def normalize_power(average_power_db: float) -> float:
    """
    Map a meter reading in dB to a display amplitude.

    The reading is converted to a linear scale, boosted five times and
    clamped to [MIN_AMPLITUDE, MAX_AMPLITUDE].
    """
    linear = 10 ** (average_power_db / 20)
    return max(settings.MIN_AMPLITUDE, min(settings.MAX_AMPLITUDE, linear * 5))


class AmplitudeHistory:
    """The most recent amplitude samples, oldest first."""

    def __init__(self, size: Optional[int] = None):
        self.size = size or settings.AMPLITUDE_HISTORY_SIZE
        self._samples = deque([settings.MIN_AMPLITUDE] * self.size, maxlen=self.size)

    def push_power(self, average_power_db: float) -> float:
        amplitude = normalize_power(average_power_db)
        self._samples.append(amplitude)
        return amplitude

    def reset(self) -> None:
        self._samples = deque([settings.MIN_AMPLITUDE] * self.size, maxlen=self.size)

    @property
    def samples(self) -> List[float]:
        return list(self._samples)


def is_valid_audio_file(path: Optional[str], min_bytes: Optional[int] = None) -> bool:
    """
    Check that a recorded audio file exists and is large enough to play.

    Args:
        path: Path of the audio file.
        min_bytes: Minimum size in bytes. Defaults to MIN_AUDIO_FILE_BYTES.

    Returns:
        bool: True if the file can be attached to a response.
    """
    if min_bytes is None:
        min_bytes = settings.MIN_AUDIO_FILE_BYTES
    size = file_size(path)
    return size > 0 and size >= min_bytes


def require_audio_file(path: Optional[str], min_bytes: Optional[int] = None) -> str:
    """
    Like is_valid_audio_file, but raise for an unusable file.

    Raises:
        InvalidAudioError: If the file is missing or too small.
    """
    if not is_valid_audio_file(path, min_bytes):
        raise InvalidAudioError(f"Audio file is missing or too small: {path}")
    return path


class ScriptedRecorder:
    """
    Recorder driven by text and meter readings supplied by the caller.

    The transcript grows while recording and is frozen by stop(). The file
    path given at construction stands in for the recorded audio file.
    """

    def __init__(self, audio_path: Optional[str] = None, history_size: Optional[int] = None):
        self.audio_path = audio_path
        self.history = AmplitudeHistory(history_size)
        self.transcript = ""
        self.recording = False
        self.transcribing = False
        self.recording_to_file = False

    @property
    def amplitudes(self) -> List[float]:
        return self.history.samples

    def start(self, transcribe: bool = True) -> None:
        self.transcript = ""
        self.history.reset()
        self.recording = True
        self.transcribing = transcribe
        logger.debug(f"Recording started (transcribe={transcribe})")

    def feed(self, text: str = "", power_db: Optional[float] = None) -> None:
        """Deliver one chunk of speech while recording. Ignored once stopped."""
        if not self.recording:
            return
        if power_db is not None:
            self.history.push_power(power_db)
        if self.transcribing and text:
            self.transcript = f"{self.transcript} {text}".strip()

    def feed_all(self, chunks: Iterable[str]) -> None:
        for chunk in chunks:
            self.feed(chunk)

    def stop(self) -> None:
        self.recording = False
        logger.debug(f"Recording stopped, transcript length {len(self.transcript)}")

    def start_recording_to_file(self) -> None:
        self.recording_to_file = True

    def stop_recording_to_file(self) -> Optional[str]:
        """Return the audio path if it holds a usable recording, else None."""
        self.recording_to_file = False
        if not is_valid_audio_file(self.audio_path):
            if self.audio_path:
                logger.warning(f"Recording file is missing or too small: {self.audio_path}")
            return None
        return self.audio_path
