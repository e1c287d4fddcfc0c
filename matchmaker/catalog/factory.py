"""Factory function for instantiating profile catalogs."""

import logging

from matchmaker.config.models import CatalogConfig

from .base import BaseCatalog
from .exceptions import CatalogConfigurationError
from .http import HttpCatalog
from .yaml_file import YamlCatalog

logger = logging.getLogger(__name__)


def get_catalog(catalog_config: CatalogConfig) -> BaseCatalog:
    """Instantiate the catalog described by ``catalog_config``.

    Args:
        catalog_config: Validated catalog section of the app config

    Returns:
        YamlCatalog or HttpCatalog

    Raises:
        CatalogConfigurationError: If the type is unknown or its settings are unusable

    Example:
        >>> catalog = get_catalog(CatalogConfig(type="yaml", path="profiles.yaml"))
        >>> creators = catalog.fetch_profiles(ParticipantKind.CREATOR)
    """
    catalog_type = str(getattr(catalog_config.type, "value", catalog_config.type)).lower()

    logger.debug(
        "Creating catalog instance",
        extra={"catalog_type": catalog_type},
    )

    if catalog_type == "yaml":
        if not catalog_config.path:
            raise CatalogConfigurationError("YAML catalog requires a path")
        return YamlCatalog(catalog_config.path)

    if catalog_type == "http":
        if not catalog_config.url:
            raise CatalogConfigurationError("HTTP catalog requires a url")
        return HttpCatalog(
            base_url=catalog_config.url,
            timeout=catalog_config.timeout,
            user_agent=catalog_config.user_agent,
        )

    raise CatalogConfigurationError(
        f"Unknown catalog type: {catalog_config.type}. Supported types: http, yaml"
    )
