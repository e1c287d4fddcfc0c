"""Soft validation checks that warn instead of failing."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but likely mistakes.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    ranking = config_dict.get("ranking", {})
    if isinstance(ranking, dict):
        max_page_size = ranking.get("max_page_size", 100)
        if isinstance(max_page_size, int) and max_page_size > 500:
            warning_messages.append(
                f"Large ranking.max_page_size ({max_page_size}) may produce very large responses"
            )

    scoring = config_dict.get("scoring", {})
    if isinstance(scoring, dict):
        bonus = scoring.get("verified_bonus", 10)
        if isinstance(bonus, (int, float)) and bonus > 25:
            warning_messages.append(
                f"scoring.verified_bonus ({bonus}) outweighs most of the relevance signal"
            )

    estimator = config_dict.get("estimator", {})
    if isinstance(estimator, dict):
        rate = estimator.get("participation_rate", 0.004)
        if isinstance(rate, (int, float)) and rate > 0.1:
            warning_messages.append(
                f"estimator.participation_rate ({rate}) assumes over 10% of creators claim each offer"
            )

    catalog = config_dict.get("catalog", {})
    if isinstance(catalog, dict) and catalog.get("type") == "http":
        url = catalog.get("url", "")
        if isinstance(url, str) and url.startswith("http://"):
            warning_messages.append(f"catalog.url ({url}) does not use TLS")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages through Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
