"""Configuration management for the creator/sponsor matchmaker."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    CatalogConfig,
    CatalogType,
    EstimatorConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RankingConfig,
    ScoringConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "CatalogConfig",
    "ScoringConfig",
    "RankingConfig",
    "EstimatorConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "CatalogType",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
