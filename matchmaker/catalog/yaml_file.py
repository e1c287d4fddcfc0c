"""YAML file catalog.

The file holds one list per participant kind::

    creators:
      - id: creator-001
        display_name: Style by Maya
        ...
    sponsors:
      - id: sponsor-001
        ...

The file is read on every fetch, so edits are picked up without a restart.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from matchmaker.domain.models import ParticipantKind
from matchmaker.logging import get_logger

from .base import BaseCatalog, ProfileRecord
from .exceptions import CatalogUnavailableError

logger = get_logger(__name__, component="catalog")

SECTION_NAMES = {
    ParticipantKind.CREATOR: "creators",
    ParticipantKind.SPONSOR: "sponsors",
}


class YamlCatalog(BaseCatalog):
    """Catalog backed by a YAML file on disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def fetch_profiles(self, kind: ParticipantKind) -> List[ProfileRecord]:
        kind = ParticipantKind(kind)
        data = self._load()

        section = SECTION_NAMES[kind]
        records = data.get(section) or []
        if not isinstance(records, list):
            raise self._data_error(
                f"Section '{section}' in {self.path} must be a list", str(self.path), kind
            )

        profiles = self._parse_records(records, kind, str(self.path))

        logger.debug(
            f"Loaded {len(profiles)} {kind.value} profiles from {self.path}",
            extra={
                "event": "catalog.fetch.succeeded",
                "source": str(self.path),
                "participant_kind": kind.value,
                "profile_count": len(profiles),
            },
        )
        return profiles

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            logger.error(
                f"Failed to read catalog file {self.path}: {e}",
                extra={"event": "catalog.fetch.error", "source": str(self.path), "error_type": type(e).__name__},
            )
            raise CatalogUnavailableError(
                f"Failed to read catalog file {self.path}: {e}", url=str(self.path)
            ) from e
        except UnicodeDecodeError as e:
            logger.error(
                f"Catalog file {self.path} is not valid UTF-8",
                extra={"event": "catalog.fetch.error", "source": str(self.path), "error_type": "UnicodeDecodeError"},
            )
            raise CatalogUnavailableError(
                f"Catalog file {self.path} is not valid UTF-8: {e}", url=str(self.path)
            ) from e
        except yaml.YAMLError as e:
            logger.error(
                f"Failed to parse catalog file {self.path}",
                extra={"event": "catalog.fetch.error", "source": str(self.path), "error_type": "YAMLError"},
            )
            raise CatalogUnavailableError(
                f"Failed to parse catalog file {self.path}: {e}", url=str(self.path)
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CatalogUnavailableError(
                f"Catalog file {self.path} must contain a mapping at the top level",
                url=str(self.path),
            )
        return data
