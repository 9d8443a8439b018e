"""
Custom Exception Classes for the Prompt Feed

This module defines custom exceptions for better error handling and
categorization of failures across the application.
"""


class FeedError(Exception):
    """Base exception for all Prompt Feed application errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(FeedError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# Repository Errors
# =============================================================================

class NotFoundError(FeedError):
    """Base exception for a referenced post or comment that does not exist."""
    pass


class PostNotFoundError(NotFoundError):
    """Raised when a post id is not present in the master list."""
    pass


class CommentNotFoundError(NotFoundError):
    """Raised when a comment id is not attached to any post."""
    pass


class UnauthorizedError(FeedError):
    """Raised when the requesting user is not the author of the post or comment."""
    pass


# =============================================================================
# Media Errors
# =============================================================================

class MediaError(FeedError):
    """Base exception for media attachment errors."""
    pass


class InvalidAudioError(MediaError):
    """Raised when a recorded audio file is missing or below the minimum size."""
    pass
