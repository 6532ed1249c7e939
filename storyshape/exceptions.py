"""
storyshape.exceptions - Custom exception classes.

All Storyshape-specific exceptions inherit from StoryshapeError. The
argument-checking errors also inherit from the matching builtin so that
callers catching TypeError/ValueError keep working.
"""


class StoryshapeError(Exception):
    """Base exception for all Storyshape errors."""

    pass


class InvalidInputError(StoryshapeError, TypeError):
    """Input has the wrong type or shape."""

    pass


class InvalidParameterError(StoryshapeError, ValueError):
    """Numeric or named parameter outside its domain."""

    pass


class ConflictingOptionsError(StoryshapeError, ValueError):
    """Mutually exclusive options were requested together."""

    pass


class InsufficientDataError(StoryshapeError, ValueError):
    """Too few values for the requested operation."""

    pass


class RescaleRangeError(StoryshapeError, ZeroDivisionError):
    """Degenerate value range (zero span or non-positive maximum)."""

    pass


class ConfigError(StoryshapeError):
    """Configuration loading or validation error."""

    pass


class LexiconError(StoryshapeError):
    """Lexicon file missing or malformed."""

    pass


class TaggerError(StoryshapeError):
    """External sentiment tagger failed or returned unusable output."""

    pass


class DependencyError(StoryshapeError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
