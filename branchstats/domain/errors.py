"""Errors raised while talking to the GitHub REST API."""
from typing import Optional


class GitHubError(Exception):
    """Base exception for all GitHub API failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(GitHubError):
    """Raised when the request never produced a response (connection, timeout)."""
    pass


class RemoteError(GitHubError):
    """Raised when GitHub answered with a non-success status.

    The message is the ``message`` field of GitHub's error payload.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeError(GitHubError):
    """Raised when a response body is not valid JSON or has an unexpected shape."""
    pass
