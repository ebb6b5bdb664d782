from __future__ import annotations

from typing import Optional


class UrlReaderError(Exception):
    """Base error for the URL reader."""


class UrlParseError(UrlReaderError):
    """Raised when a target URL cannot be decomposed into repository coordinates."""


class ProviderConfigError(UrlReaderError):
    """Raised when a provider configuration entry is unusable."""


class UnsupportedHostError(UrlReaderError):
    """Raised when no configured provider serves the URL's host."""


class NetworkError(UrlReaderError):
    """Base for errors derived from a network request.

    Carries the caller-supplied URL and, where known, the resolved endpoint
    and HTTP status so failures can be diagnosed without re-deriving them.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str,
        resolved_url: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.resolved_url = resolved_url
        self.status = status


class TransportError(NetworkError):
    """Raised when a request never produced a response."""


class RemoteError(NetworkError):
    """Raised for a non-success response other than 404."""


class NotFoundError(NetworkError):
    """Raised when the remote answers 404."""


class ArchiveError(RemoteError):
    """Raised when a repository archive is malformed or truncated mid-stream."""
