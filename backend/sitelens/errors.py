"""
Error taxonomy for an analysis request.

Only validation and navigation failures abort an analysis. Partial loads,
subpage failures and insight failures are absorbed where they happen.
"""

from urllib.parse import urlparse


class SiteAnalysisError(Exception):
    """Base class for errors that abort an analysis."""


class InvalidURLError(SiteAnalysisError):
    """The requested URL is malformed. Raised before any browser work."""


class NavigationError(SiteAnalysisError):
    """The target could not be reached at all (DNS, refused connection)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to load {url}: {reason}")


def validate_url(url: str) -> str:
    """Return the stripped URL or raise InvalidURLError."""
    if url is None or not str(url).strip():
        raise InvalidURLError("URL cannot be empty")

    url = str(url).strip()
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(f"Invalid URL scheme: {parsed.scheme or '(none)'} (must be http or https)")
    if not parsed.hostname:
        raise InvalidURLError("Invalid URL format: missing domain")
    if any(ch.isspace() for ch in url):
        raise InvalidURLError("Invalid URL format: contains whitespace")

    return url
