"""Profile catalogs: the read-only source of discovery candidates.

Use the factory to build the configured catalog:
    from matchmaker.catalog import get_catalog
    catalog = get_catalog(app_config.catalog)
    creators = catalog.fetch_profiles(ParticipantKind.CREATOR)

Or instantiate one directly (InMemoryCatalog, YamlCatalog, HttpCatalog).
"""

from .base import BaseCatalog
from .exceptions import CatalogConfigurationError, CatalogError, CatalogUnavailableError
from .factory import get_catalog
from .http import HttpCatalog
from .memory import InMemoryCatalog
from .yaml_file import YamlCatalog

__all__ = [
    # Base and factory
    "BaseCatalog",
    "get_catalog",
    # Catalogs
    "InMemoryCatalog",
    "YamlCatalog",
    "HttpCatalog",
    # Exceptions
    "CatalogError",
    "CatalogUnavailableError",
    "CatalogConfigurationError",
]
