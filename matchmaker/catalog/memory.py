"""In-memory catalog for embedding the engine and for deterministic tests."""

from typing import Iterable, List

from matchmaker.domain.models import ParticipantKind

from .base import BaseCatalog, ProfileRecord
from .exceptions import CatalogConfigurationError


class InMemoryCatalog(BaseCatalog):
    """Serves a fixed list of already-validated profiles."""

    def __init__(self, profiles: Iterable[ProfileRecord]) -> None:
        """
        Args:
            profiles: Creator and sponsor profiles, in catalog order

        Raises:
            CatalogConfigurationError: If two profiles of the same kind share an id
        """
        self._profiles = tuple(profiles)

        seen = set()
        for profile in self._profiles:
            key = (profile.kind, profile.id)
            if key in seen:
                raise CatalogConfigurationError(
                    f"Duplicate {profile.kind} profile id: {profile.id!r}"
                )
            seen.add(key)

    def fetch_profiles(self, kind: ParticipantKind) -> List[ProfileRecord]:
        kind = ParticipantKind(kind)
        return [profile for profile in self._profiles if profile.kind == kind.value]
