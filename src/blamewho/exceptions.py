"""Custom exceptions for blamewho."""


class BlamewhoError(Exception):
    """Base exception for all blamewho errors."""


class ConfigError(BlamewhoError):
    """Configuration-related errors."""


class DiffParseError(BlamewhoError):
    """Raised when a unified diff is structurally malformed."""


class BlameError(BlamewhoError):
    """Raised when `git blame` could not be run for a file."""


class GitHubError(BlamewhoError):
    """GitHub API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
