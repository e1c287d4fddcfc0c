"""Base class for profile catalogs.

A catalog supplies the complete, materialised list of candidate profiles for
one participant kind. Implementations differ only in where the raw records
come from; validation into Profile models is shared here.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Union

from pydantic import ValidationError

from matchmaker.domain.models import CreatorProfile, ParticipantKind, SponsorProfile, parse_profile
from matchmaker.logging import get_logger

from .exceptions import CatalogUnavailableError

logger = get_logger(__name__, component="catalog")

ProfileRecord = Union[CreatorProfile, SponsorProfile]


class BaseCatalog(ABC):
    """Read-only source of candidate profiles.

    All catalogs must implement fetch_profiles(). They return every profile of
    the requested kind or raise CatalogUnavailableError; partial lists are
    never returned.
    """

    @abstractmethod
    def fetch_profiles(self, kind: ParticipantKind) -> List[ProfileRecord]:
        """Fetch all profiles of one participant kind.

        Args:
            kind: Which side of the marketplace to fetch

        Returns:
            Profiles in catalog order

        Raises:
            CatalogUnavailableError: On I/O failure or malformed data
        """
        pass

    def _parse_records(
        self, records: Iterable[Any], kind: ParticipantKind, source: str
    ) -> List[ProfileRecord]:
        """Validate raw records into profiles of ``kind``.

        Any invalid record or duplicate identifier fails the whole batch.

        Args:
            records: Raw profile mappings
            kind: Expected participant kind
            source: File path or URL (for error messages)

        Returns:
            Validated profiles in input order

        Raises:
            CatalogUnavailableError: If any record is invalid
        """
        profiles: List[ProfileRecord] = []
        seen_ids = set()

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise self._data_error(
                    f"Profile record {index} from {source} is not a mapping", source, kind
                )
            try:
                profile = parse_profile(record, kind)
            except (ValidationError, ValueError) as e:
                raise self._data_error(
                    f"Invalid {kind.value} profile record {index} from {source}: {e}", source, kind
                ) from e

            if profile.id in seen_ids:
                raise self._data_error(
                    f"Duplicate {kind.value} profile id {profile.id!r} in {source}", source, kind
                )
            seen_ids.add(profile.id)
            profiles.append(profile)

        return profiles

    @staticmethod
    def _data_error(message: str, source: str, kind: ParticipantKind) -> CatalogUnavailableError:
        logger.error(
            message,
            extra={
                "event": "catalog.fetch.invalid_data",
                "source": source,
                "participant_kind": kind.value,
            },
        )
        return CatalogUnavailableError(message, url=source)
