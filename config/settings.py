"""
Configuration Settings for the Prompt Feed

This module centralizes all configuration settings for the Prompt Feed,
including environment variables and application constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))


def _env_list(name: str, default: str) -> list:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Identity Settings
# =============================================================================

# The signed-in identity; other ids are used for perspective switching
PRIMARY_USER_ID = os.getenv("PRIMARY_USER_ID", "current-user")
PRIMARY_USER_NAME = os.getenv("PRIMARY_USER_NAME", "You")
PRIMARY_USER_HANDLE = os.getenv("PRIMARY_USER_HANDLE", "@you")

# Fixed friend set used by the feed filter
BASE_FRIEND_IDS = _env_list("BASE_FRIEND_IDS", "user-sarah,user-alex,user-jordan")

# =============================================================================
# Prompt Settings
# =============================================================================

TODAY_PROMPT_ID = os.getenv("TODAY_PROMPT_ID", "today-prompt")
TODAY_PROMPT_TEXT = os.getenv("TODAY_PROMPT_TEXT", "what are you happy about")
PROMPT_LIFETIME_HOURS = 24           # A prompt expires one day after it is issued

# =============================================================================
# Feed Settings
# =============================================================================

DEFAULT_FEED_LIMIT = int(os.getenv("DEFAULT_FEED_LIMIT", "30"))
SEED_MOCK_DATA = _env_bool("SEED_MOCK_DATA", True)

# =============================================================================
# Recorder Settings
# =============================================================================

AMPLITUDE_HISTORY_SIZE = 30          # Samples kept for the live level graph
MIN_AMPLITUDE = 0.1
MAX_AMPLITUDE = 1.0
MIN_AUDIO_FILE_BYTES = int(os.getenv("MIN_AUDIO_FILE_BYTES", "1000"))

# =============================================================================
# Logging Settings
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")


def validate_settings():
    """Validate settings. See config.validators.validate_settings."""
    from config.validators import validate_settings as _validate
    return _validate()


def get_config_summary() -> dict:
    """Summary of current configuration. See config.validators.get_config_summary."""
    from config.validators import get_config_summary as _summary
    return _summary()
