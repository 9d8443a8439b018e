"""
Configuration Validation for the Prompt Feed

This module contains configuration validation logic.
Kept apart from settings.py for better separation of concerns.
"""

import logging

from utils.exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_settings():
    """
    Validate that all required settings are properly configured.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    # Import settings here to avoid circular imports
    from config import settings

    errors = []
    logger = logging.getLogger(__name__)

    # Required identity values
    required_vars = [
        ("PRIMARY_USER_ID", settings.PRIMARY_USER_ID),
        ("TODAY_PROMPT_ID", settings.TODAY_PROMPT_ID),
        ("TODAY_PROMPT_TEXT", settings.TODAY_PROMPT_TEXT),
    ]

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required setting: {var_name}")

    if settings.PRIMARY_USER_ID and settings.PRIMARY_USER_ID in settings.BASE_FRIEND_IDS:
        errors.append("PRIMARY_USER_ID cannot be listed in BASE_FRIEND_IDS")

    if not settings.BASE_FRIEND_IDS:
        logger.warning("BASE_FRIEND_IDS is empty. The Friends tab will only show friends-only posts.")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("DEFAULT_FEED_LIMIT", settings.DEFAULT_FEED_LIMIT, 1, 1000),
        ("AMPLITUDE_HISTORY_SIZE", settings.AMPLITUDE_HISTORY_SIZE, 1, 1000),
        ("MIN_AUDIO_FILE_BYTES", settings.MIN_AUDIO_FILE_BYTES, 0, 10_000_000),
        ("PROMPT_LIFETIME_HOURS", settings.PROMPT_LIFETIME_HOURS, 1, 24 * 7),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    if not 0 < settings.MIN_AMPLITUDE <= settings.MAX_AMPLITUDE:
        errors.append(
            f"Amplitude bounds must satisfy 0 < MIN_AMPLITUDE <= MAX_AMPLITUDE, "
            f"got {settings.MIN_AMPLITUDE} and {settings.MAX_AMPLITUDE}"
        )

    if settings.LOG_LEVEL not in VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {settings.LOG_LEVEL}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration.
    Useful for logging startup state.
    """
    # Import settings here to avoid circular imports
    from config import settings

    return {
        "identity": {
            "primary_user": settings.PRIMARY_USER_ID,
            "base_friends": list(settings.BASE_FRIEND_IDS),
        },
        "prompt": {
            "id": settings.TODAY_PROMPT_ID,
            "text": settings.TODAY_PROMPT_TEXT,
        },
        "feed_settings": {
            "default_limit": settings.DEFAULT_FEED_LIMIT,
            "seed_mock_data": settings.SEED_MOCK_DATA,
        },
        "recorder": {
            "amplitude_history": settings.AMPLITUDE_HISTORY_SIZE,
            "min_audio_bytes": settings.MIN_AUDIO_FILE_BYTES,
        },
    }
