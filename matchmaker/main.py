"""Command-line entry point for the creator/sponsor matchmaker."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from dotenv import load_dotenv
from pydantic import ValidationError

from matchmaker.catalog.exceptions import CatalogConfigurationError, CatalogUnavailableError
from matchmaker.config.environment import EnvironmentConfig
from matchmaker.config.exceptions import ConfigurationError
from matchmaker.config.loader import load_config
from matchmaker.config.models import AppConfig
from matchmaker.domain.exceptions import InvalidFilterError, InvalidInputError
from matchmaker.domain.models import FilterSpec, ParticipantKind, RewardType, SortKey, TargetingCriteria
from matchmaker.logging import get_logger
from matchmaker.logging.config import configure_logging
from matchmaker.service import DiscoveryRequest, MatchmakerService, SuggestionRequest

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2
EXIT_CATALOG_UNAVAILABLE = 3

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    A config file is optional unless --config names one; without a file the
    built-in defaults and environment overrides apply.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path, required=config_path is not None)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matchmaker",
        description="Creator/Sponsor Matchmaker - discovery, matching and campaign estimation",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    discover = subparsers.add_parser("discover", help="Search creators or sponsors")
    discover.add_argument("kind", choices=[k.value for k in ParticipantKind], help="Side to search")
    discover.add_argument("--query", help="Text to find in name or description")
    discover.add_argument(
        "--category", action="append", default=[], help="Accepted niche/industry (repeatable)"
    )
    discover.add_argument("--location", help="Location substring")
    discover.add_argument("--min-engagement", type=float, help="Minimum engagement rate %%")
    discover.add_argument("--max-engagement", type=float, help="Maximum engagement rate %%")
    discover.add_argument("--min-followers", type=int, help="Minimum follower count")
    discover.add_argument("--max-followers", type=int, help="Maximum follower count")
    discover.add_argument(
        "--reward-type", choices=[r.value for r in RewardType], help="Required reward type"
    )
    discover.add_argument("--tag", action="append", default=[], help="Required tag (repeatable)")
    discover.add_argument(
        "--sort-by",
        choices=[s.value for s in SortKey],
        default=SortKey.RELEVANCE.value,
        help="Result ordering (default: relevance)",
    )
    discover.add_argument("--min-score", type=int, help="Drop results scoring below this")
    discover.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    discover.add_argument("--page-size", type=int, help="Results per page")
    discover.add_argument(
        "--recommended",
        action="store_true",
        help="Return the top matches by score instead of a sorted page",
    )

    estimate = subparsers.add_parser("estimate", help="Estimate campaign reach")
    estimate.add_argument("--min-followers", type=int, default=0, help="Follower threshold")
    estimate.add_argument(
        "--min-engagement", type=float, default=0.0, help="Minimum engagement rate %%"
    )
    estimate.add_argument("--posts", type=int, default=1, help="Posts required per creator")

    suggest = subparsers.add_parser("suggest", help="Suggest content ideas for an offer")
    suggest.add_argument("--category", default="", help="Offer category, e.g. fashion")
    suggest.add_argument("--content-type", default="", help="image, video, story or multiple")
    suggest.add_argument("--reward-type", default="", help="monetary, product or both")

    return parser


def run_command(args: argparse.Namespace, service: MatchmakerService) -> Any:
    """Execute the selected subcommand and return a JSON-serialisable result."""
    if args.command == "discover":
        filters = FilterSpec(
            query=args.query,
            categories=args.category,
            location=args.location,
            min_engagement=args.min_engagement,
            max_engagement=args.max_engagement,
            min_followers=args.min_followers,
            max_followers=args.max_followers,
            reward_type=args.reward_type,
            tags=args.tag,
            sort_by=args.sort_by,
            min_match_score=args.min_score,
        )
        if args.recommended:
            results = service.recommend(args.kind, filters, limit=args.page_size)
            return [result.model_dump(mode="json") for result in results]

        response = service.discover(
            DiscoveryRequest(
                participant_kind=args.kind,
                filters=filters,
                page=args.page,
                page_size=args.page_size,
            )
        )
        return response.model_dump(mode="json")

    if args.command == "estimate":
        criteria = TargetingCriteria(
            min_followers=args.min_followers,
            min_engagement_percent=args.min_engagement,
            posts_required=args.posts,
        )
        return service.estimate(criteria).model_dump(mode="json")

    if args.command == "suggest":
        return service.suggest(
            SuggestionRequest(
                category=args.category,
                content_type=args.content_type,
                reward_type=args.reward_type,
            )
        )

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the matchmaker CLI.

    Results are written to stdout as JSON; logs go to stderr.

    Returns:
        Exit code: 0 success, 1 configuration or unexpected error,
        2 invalid filter or input, 3 catalog unavailable
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.debug(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "command": args.command,
                "catalog_configured": app_config.catalog is not None,
                "log_level": env_config.log_level,
            },
        )

        service = MatchmakerService.from_config(app_config)
        result = run_command(args, service)

        print(json.dumps(result, indent=2, ensure_ascii=False))
        return EXIT_OK

    except (InvalidFilterError, InvalidInputError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except ValidationError as e:
        errors: List[str] = [
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
        ]
        print(f"Invalid input: {'; '.join(errors)}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except CatalogUnavailableError as e:
        print(f"Catalog unavailable: {e}", file=sys.stderr)
        return EXIT_CATALOG_UNAVAILABLE
    except (ConfigurationError, CatalogConfigurationError) as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": type(e).__name__},
        )
        return EXIT_ERROR
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "cli.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return EXIT_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
