"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        catalog_path: Optional[str] = None,
        catalog_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.catalog_path = catalog_path
        self.catalog_url = catalog_url
        self.log_level = log_level.upper() if log_level else None
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - CATALOG_PATH: Profile YAML file, overrides the configured catalog
    - CATALOG_URL: Base URL of a profile service, overrides the configured catalog
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to every log record

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    catalog_path = os.getenv("CATALOG_PATH") or None
    catalog_url = os.getenv("CATALOG_URL") or None
    log_level = os.getenv("LOG_LEVEL") or None
    environment = os.getenv("ENVIRONMENT") or None

    if catalog_path and catalog_url:
        errors.append("CATALOG_PATH and CATALOG_URL are both set. Set only one of them.")

    if catalog_url and not catalog_url.startswith(("http://", "https://")):
        errors.append(f"Invalid CATALOG_URL: '{catalog_url}'. Must start with http:// or https://")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check your .env file or exported variables",
                "Unset CATALOG_PATH or CATALOG_URL to use the catalog from config.yaml",
            ],
        )

    return EnvironmentConfig(
        catalog_path=catalog_path,
        catalog_url=catalog_url,
        log_level=log_level,
        environment=environment,
    )
