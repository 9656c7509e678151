"""Exceptions raised by the post linter."""


class PostLintError(Exception):
    """Base class for linter failures."""


class FrontMatterError(PostLintError):
    """Raised when a post's front-matter block cannot be read."""

    def __init__(self, message: str, line: int = 1):
        self.line = line
        super().__init__(message)


class ConfigError(PostLintError):
    """Raised for invalid linter settings, e.g. an unknown rule name."""
