"""Configuration loader for the matchmaker."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings


def load_config(
    config_path: Optional[Path] = None, required: bool = True
) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup:
    1. Use config_path if given
    2. Try config.yaml in the current directory
    3. Try ./config/config.yaml
    4. Fail with a helpful error message, or use built-in defaults when
       ``required`` is False

    A relative ``catalog.path`` in the file is resolved against the file's
    directory. CATALOG_PATH / CATALOG_URL from the environment replace the
    file's catalog section entirely.

    Args:
        config_path: Optional path to configuration file (must exist if given)
        required: Whether a missing default config file is an error

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path, required)
    config_dict = _read_yaml(config_file) if config_file else {}

    env_config = load_environment_config()

    if config_file:
        _resolve_catalog_path(config_dict, config_file.parent)
    _apply_environment_overrides(config_dict, env_config)

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    return _validate(config_dict), env_config


def _read_yaml(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            f"Configuration file is not valid UTF-8: {e}",
            suggestions=[f"Save {config_file} with UTF-8 encoding"],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} exists and is readable"],
        ) from e

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=["Copy config.example.yaml to config.yaml"],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Review config.example.yaml for the expected layout"],
        )

    return config_dict


def _resolve_catalog_path(config_dict: Dict[str, Any], base_dir: Path) -> None:
    catalog = config_dict.get("catalog")
    if not isinstance(catalog, dict):
        return
    path = catalog.get("path")
    if isinstance(path, str) and path.strip() and not Path(path).is_absolute():
        catalog["path"] = str(base_dir / path.strip())


def _apply_environment_overrides(config_dict: Dict[str, Any], env_config: EnvironmentConfig) -> None:
    catalog = config_dict.get("catalog")
    catalog = dict(catalog) if isinstance(catalog, dict) else {}

    if env_config.catalog_url:
        catalog.update({"type": "http", "url": env_config.catalog_url, "path": None})
        config_dict["catalog"] = catalog
    elif env_config.catalog_path:
        catalog.update({"type": "yaml", "path": env_config.catalog_path, "url": None})
        config_dict["catalog"] = catalog


def _validate(config_dict: Dict[str, Any]) -> AppConfig:
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "config"
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "int_type", "float_type", "bool_type"):
                expected_type = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
                )
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e


def _find_config_file(config_path: Optional[Path] = None, required: bool = True) -> Optional[Path]:
    """
    Find the configuration file using fallback logic.

    Returns:
        Path of the config file, or None if none exists and it is not required

    Raises:
        ConfigurationError: If no config file is found and one is required
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    "Copy config.example.yaml to config.yaml",
                    "Check the --config path and try again",
                ],
            )
        return config_path

    candidates = [
        Path("config.yaml"),
        Path("config") / "config.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    if not required:
        return None

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in candidates],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Use --config to specify a custom location",
        ],
    )
