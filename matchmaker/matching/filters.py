"""Filter predicate builder.

Turns a FilterSpec into a boolean predicate over profiles. Every constraint
present in the FilterSpec must hold (AND); absent constraints accept everything.
Filters are validated before the predicate is returned, so invalid filters
never reach scoring.
"""

import math
from typing import Callable, List, Optional

from matchmaker.domain.exceptions import InvalidFilterError
from matchmaker.domain.models import BaseProfile, CreatorProfile, FilterSpec, SponsorProfile
from matchmaker.logging import get_logger

logger = get_logger(__name__, component="filters")

Predicate = Callable[[BaseProfile], bool]


def _in_range(value: float, minimum: Optional[float], maximum: Optional[float]) -> bool:
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


class FilterPredicateBuilder:
    """Builds profile predicates from FilterSpecs.

    Matching rules:
    - query: case-insensitive substring of display name or description
    - categories: profile category is one of them (case-insensitive, OR)
    - location: case-insensitive substring
    - engagement / follower ranges: inclusive bounds on creator metrics;
      sponsors never satisfy a bound that is set
    - reward_type: exact match on sponsors; creators never satisfy it
    - tags: every tag present on the profile (case-sensitive, AND)
    """

    def validate(self, spec: FilterSpec) -> None:
        """Check a FilterSpec for malformed constraints.

        Raises:
            InvalidFilterError: Listing every problem found
        """
        errors: List[str] = []

        ranges = (
            ("engagement", spec.min_engagement, spec.max_engagement),
            ("followers", spec.min_followers, spec.max_followers),
        )
        for name, minimum, maximum in ranges:
            for bound_name, bound in (("min", minimum), ("max", maximum)):
                if bound is None:
                    continue
                if isinstance(bound, float) and math.isnan(bound):
                    errors.append(f"{bound_name}_{name} is not a number")
                elif bound < 0:
                    errors.append(f"{bound_name}_{name} cannot be negative, got: {bound}")
            if minimum is not None and maximum is not None and minimum > maximum:
                errors.append(f"min_{name} ({minimum}) is greater than max_{name} ({maximum})")

        if spec.min_match_score is not None and not 0 <= spec.min_match_score <= 100:
            errors.append(f"min_match_score must be between 0 and 100, got: {spec.min_match_score}")

        if errors:
            logger.warning(
                "Rejected invalid filter",
                extra={"event": "filters.invalid", "errors": errors},
            )
            raise InvalidFilterError("Invalid filter", errors=errors)

    def build(self, spec: FilterSpec) -> Predicate:
        """Validate ``spec`` and return a predicate for it.

        Args:
            spec: Search filters

        Returns:
            Callable returning True for profiles that satisfy every constraint

        Raises:
            InvalidFilterError: If the filters are malformed
        """
        self.validate(spec)

        checks: List[Predicate] = []

        if spec.query:
            query = spec.query.casefold()
            checks.append(
                lambda p: query in p.display_name.casefold() or query in p.description.casefold()
            )

        if spec.categories:
            categories = frozenset(category.casefold() for category in spec.categories)
            checks.append(lambda p: p.category.casefold() in categories)

        if spec.location:
            location = spec.location.casefold()
            checks.append(lambda p: location in p.location.casefold())

        if spec.min_engagement is not None or spec.max_engagement is not None:
            low, high = spec.min_engagement, spec.max_engagement
            checks.append(
                lambda p: isinstance(p, CreatorProfile) and _in_range(p.engagement_rate, low, high)
            )

        if spec.min_followers is not None or spec.max_followers is not None:
            low_f, high_f = spec.min_followers, spec.max_followers
            checks.append(
                lambda p: isinstance(p, CreatorProfile) and _in_range(p.follower_count, low_f, high_f)
            )

        if spec.reward_type is not None:
            reward_type = spec.reward_type
            checks.append(lambda p: isinstance(p, SponsorProfile) and p.reward_type == reward_type)

        if spec.tags:
            required_tags = frozenset(spec.tags)
            checks.append(lambda p: required_tags <= p.tags)

        logger.debug(
            "Filter predicate built",
            extra={"event": "filters.built", "constraint_count": len(checks)},
        )

        if not checks:
            return lambda p: True

        return lambda p: all(check(p) for check in checks)


def build_predicate(spec: FilterSpec) -> Predicate:
    """Shortcut for FilterPredicateBuilder().build(spec)."""
    return FilterPredicateBuilder().build(spec)
