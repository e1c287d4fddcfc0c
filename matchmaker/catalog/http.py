"""HTTP catalog backed by a remote profile service.

Profiles of one kind are fetched with ``GET {base_url}/creators`` or
``GET {base_url}/sponsors``. The response is either a JSON list of profile
objects or an object with a ``profiles`` list.
"""

import logging
from typing import Any, List

import requests

from matchmaker.domain.models import ParticipantKind
from matchmaker.logging import get_logger

from .base import BaseCatalog, ProfileRecord
from .exceptions import CatalogConfigurationError, CatalogUnavailableError

logger = get_logger(__name__, component="catalog")


class HttpCatalog(BaseCatalog):
    """Catalog that reads profiles from a JSON HTTP endpoint.

    Attributes:
        base_url: Service root, without trailing slash
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        user_agent: str = "CreatorSponsorMatchmaker/1.0",
    ) -> None:
        """
        Raises:
            CatalogConfigurationError: If the URL, timeout or user agent is unusable
        """
        if not base_url or not base_url.startswith(("http://", "https://")):
            raise CatalogConfigurationError(f"base_url must be an http(s) URL, got: {base_url!r}")
        if not 5 <= timeout <= 300:
            raise CatalogConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise CatalogConfigurationError("user_agent cannot be empty")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update(
            {"User-Agent": self.user_agent, "Accept": "application/json"}
        )

    def fetch_profiles(self, kind: ParticipantKind) -> List[ProfileRecord]:
        kind = ParticipantKind(kind)
        url = f"{self.base_url}/{kind.value}s"

        data = self._get_json(url)

        if isinstance(data, dict) and "profiles" in data:
            data = data["profiles"]
        if not isinstance(data, list):
            raise self._data_error(
                f"Expected a list of profiles from {url}, got {type(data).__name__}", url, kind
            )

        profiles = self._parse_records(data, kind, url)

        logger.info(
            f"Fetched {len(profiles)} {kind.value} profiles",
            extra={
                "event": "catalog.fetch.succeeded",
                "url": url,
                "participant_kind": kind.value,
                "profile_count": len(profiles),
            },
        )
        return profiles

    def _get_json(self, url: str) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            CatalogUnavailableError: On timeout, connection failure, HTTP status
                >= 400 or an undecodable body
        """
        logger.debug(
            f"HTTP GET {url}",
            extra={"event": "catalog.fetch.request", "url": url, "timeout": self.timeout},
        )

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "catalog.fetch.error", "error_type": "Timeout", "url": url},
            )
            raise CatalogUnavailableError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "catalog.fetch.error", "error_type": type(e).__name__, "url": url},
            )
            raise CatalogUnavailableError(f"Request to {url} failed: {e}", url=url) from e

        if response.status_code >= 400:
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "catalog.fetch.error",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise CatalogUnavailableError(
                f"HTTP {response.status_code}: {response.reason}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={"event": "catalog.fetch.error", "error_type": "JSONDecodeError", "url": url},
            )
            raise CatalogUnavailableError(
                f"Failed to parse JSON response from {url}: {e}", url=url
            ) from e
