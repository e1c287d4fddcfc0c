"""Campaign reach estimation.

Follower counts across the creator pool are modelled as a Lomax (Pareto II)
distribution with scale ``s`` and shape ``a``:

    fraction of creators with at least t followers   S(t) = (1 + t/s) ** -a
    mean audience of those creators                  t + (s + t) / (a - 1)

Their product simplifies to ``(s / (s + t))**a * (s + a*t) / (a - 1)``,
which never increases with t. Committed creators shrink by
``commitment_decay`` for every post required beyond the first.
"""

import math
from numbers import Real
from typing import Optional

from matchmaker.config.models import EstimatorConfig
from matchmaker.domain.exceptions import InvalidInputError
from matchmaker.domain.models import BaseProfile, ReachEstimate, TargetingCriteria
from matchmaker.logging import get_logger

logger = get_logger(__name__, component="estimator")

OVERLAP_BASE = 50
OVERLAP_NICHE_EXACT = 30
OVERLAP_NICHE_PARTIAL = 15
OVERLAP_LOCATION_EXACT = 20
OVERLAP_LOCATION_PARTIAL = 10

# Follower thresholds above this are evaluated in log space, where integers
# too large for a float still work.
LOG_SPACE_THRESHOLD = 10**15


def _log_add(log_x: float, log_y: float) -> float:
    """log(x + y) from log(x) and log(y)."""
    high, low = max(log_x, log_y), min(log_x, log_y)
    return high + math.log1p(math.exp(low - high))


def _check_count(name: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer, got: {value!r}")
    if value < minimum:
        raise InvalidInputError(f"{name} must be >= {minimum}, got: {value}")


def _check_percent(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number, got: {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got: {value}")
    if value < 0:
        raise InvalidInputError(f"{name} cannot be negative, got: {value}")


def _alignment(left: str, right: str, exact: int, partial: int) -> int:
    left = (left or "").strip().casefold()
    right = (right or "").strip().casefold()
    if not left or not right:
        return 0
    if left == right:
        return exact
    if left in right or right in left:
        return partial
    return 0


class ReachEstimator:
    """Estimates reach and engagement of a collaboration offer.

    Pure and deterministic: the same criteria always give the same estimate.
    """

    def __init__(self, config: Optional[EstimatorConfig] = None):
        self.config = config or EstimatorConfig()

    def estimate(
        self, min_followers: int, min_engagement_percent: float, posts_required: int
    ) -> ReachEstimate:
        """Estimate audience reach for an offer's targeting criteria.

        Args:
            min_followers: Follower threshold creators must clear (>= 0)
            min_engagement_percent: Minimum engagement rate in percent (>= 0)
            posts_required: Posts each creator commits to (>= 1)

        Returns:
            ReachEstimate with truncated (floored) integer values

        Raises:
            InvalidInputError: If any argument is negative, non-finite or of the
                wrong type, or posts_required is below 1
        """
        _check_count("min_followers", min_followers, 0)
        _check_percent("min_engagement_percent", min_engagement_percent)
        _check_count("posts_required", posts_required, 1)

        committed_audience = self._qualifying_audience(min_followers) * self._commitment_share(
            posts_required
        )
        total_reach = max(math.floor(committed_audience), 0)
        engagement_interactions = max(math.floor(total_reach * min_engagement_percent / 100), 0)

        logger.debug(
            "Estimated campaign reach",
            extra={
                "event": "estimator.estimate.completed",
                "min_followers": min_followers,
                "min_engagement_percent": min_engagement_percent,
                "posts_required": posts_required,
                "total_reach": total_reach,
                "engagement_interactions": engagement_interactions,
            },
        )

        return ReachEstimate(
            total_reach=total_reach, engagement_interactions=engagement_interactions
        )

    def estimate_for(self, criteria: TargetingCriteria) -> ReachEstimate:
        """Estimate reach for a TargetingCriteria value."""
        return self.estimate(
            criteria.min_followers, criteria.min_engagement_percent, criteria.posts_required
        )

    def _qualifying_audience(self, min_followers: int) -> float:
        # pool_size * S(t) * E[X | X >= t]
        s = self.config.follower_scale
        a = self.config.follower_shape
        if min_followers > LOG_SPACE_THRESHOLD:
            return math.exp(self._log_qualifying_audience(min_followers))

        t = float(min_followers)
        ratio = s / (s + t)
        return self.config.pool_size * ratio**a * (s + a * t) / (a - 1)

    def _log_qualifying_audience(self, min_followers: int) -> float:
        # math.log accepts ints of any size; exp() of a very negative result is 0.0
        s = self.config.follower_scale
        a = self.config.follower_shape
        log_s = math.log(s)
        log_t = math.log(min_followers)
        return (
            math.log(self.config.pool_size)
            + a * log_s
            + _log_add(log_s, math.log(a) + log_t)
            - math.log(a - 1)
            - a * _log_add(log_s, log_t)
        )

    def _commitment_share(self, posts_required: int) -> float:
        return self.config.participation_rate * self.config.commitment_decay ** (posts_required - 1)

    @staticmethod
    def audience_overlap(profile: BaseProfile, niche: str, location: str) -> int:
        """Rough audience overlap (0-100) between a creator and a business.

        Starts at 50 and adds points for niche and location alignment; exact
        (case-insensitive) matches count more than one containing the other.
        """
        overlap = OVERLAP_BASE
        overlap += _alignment(profile.category, niche, OVERLAP_NICHE_EXACT, OVERLAP_NICHE_PARTIAL)
        overlap += _alignment(
            profile.location, location, OVERLAP_LOCATION_EXACT, OVERLAP_LOCATION_PARTIAL
        )
        return min(overlap, 100)
