"""glp exceptions."""

from __future__ import annotations


class GlpError(Exception):
    """Base exception for glp operations."""


class ConfigError(GlpError):
    """Raised when the project identifier or token cannot be resolved."""


class TransportError(GlpError):
    """Raised when a request to GitLab fails at the network level."""


class GitLabApiError(TransportError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class ParseError(GlpError):
    """Raised when a response body does not have the expected shape."""


class TimestampParseError(ParseError):
    """Raised when a pipeline timestamp is not valid RFC 3339."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Cannot parse pipeline timestamp: {value!r}")
