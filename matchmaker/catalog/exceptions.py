"""Custom exceptions for profile catalogs."""

from typing import Optional

from matchmaker.domain.exceptions import MatchmakerError


class CatalogError(MatchmakerError):
    """Base exception for all catalog errors."""

    pass


class CatalogUnavailableError(CatalogError):
    """The catalog could not deliver a complete profile list.

    Covers I/O failures, HTTP errors, timeouts and malformed profile data. A
    discovery request that hits this error fails as a whole; nothing retries
    it internally.
    """

    def __init__(
        self, message: str, url: Optional[str] = None, status_code: Optional[int] = None
    ) -> None:
        """Initialize with optional request details.

        Args:
            message: Human-readable error message
            url: URL or file path that failed, if any
            status_code: HTTP status code, if the failure was an HTTP response
        """
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CatalogConfigurationError(CatalogError):
    """The catalog was given unusable configuration (unknown type, missing path)."""

    pass
