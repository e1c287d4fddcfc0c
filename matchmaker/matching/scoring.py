"""Match scoring between a seeker and a candidate profile.

The score is a weighted sum of normalised components, expressed in points
out of 100 (weights come from ScoringConfig):

- tag overlap: shared tags / all tags of seeker and candidate (Jaccard)
- rating: candidate rating / 5
- context: mean of category alignment and location alignment
- verified: flat bonus when the candidate is verified

The total is clamped to [0, 100] and rounded half-up. Scoring is a pure
function of its inputs: no randomness, no clock.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import AbstractSet, FrozenSet, Optional

from matchmaker.config.models import ScoringConfig
from matchmaker.domain.models import BaseProfile, FilterSpec

from .models import ScoreBreakdown

PARTIAL_LOCATION_AFFINITY = 0.7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (72.5 -> 73)."""
    # repr() after round() drops binary noise such as 72.49999999999999
    return int(Decimal(repr(round(value, 9))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class SeekerContext:
    """What the seeker is looking for, as far as scoring is concerned.

    Categories and location are case-folded on construction; tags are kept
    case-sensitive.
    """

    tags: FrozenSet[str] = field(default_factory=frozenset)
    categories: FrozenSet[str] = field(default_factory=frozenset)
    location: str = ""

    def __post_init__(self):
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(
            self,
            "categories",
            frozenset(c.strip().casefold() for c in self.categories if c and c.strip()),
        )
        object.__setattr__(self, "location", (self.location or "").strip().casefold())

    @classmethod
    def from_filter_spec(cls, spec: FilterSpec) -> "SeekerContext":
        """Seeker intent expressed through search filters."""
        return cls(tags=frozenset(spec.tags), categories=frozenset(spec.categories), location=spec.location or "")

    @classmethod
    def from_profile(cls, profile: BaseProfile) -> "SeekerContext":
        """Seeker intent derived from the seeker's own profile."""
        categories = frozenset([profile.category]) if profile.category else frozenset()
        return cls(tags=profile.tags, categories=categories, location=profile.location)


class MatchScorer:
    """Computes 0-100 match scores for (seeker, candidate) pairs."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score(self, seeker: SeekerContext, candidate: BaseProfile) -> int:
        """Integer match score in [0, 100]."""
        return self.finalize(self.breakdown(seeker, candidate))

    def breakdown(self, seeker: SeekerContext, candidate: BaseProfile) -> ScoreBreakdown:
        """Points contributed by each component, before clamping and rounding."""
        return ScoreBreakdown(
            tag_overlap=self.config.tag_overlap_weight * tag_overlap(seeker.tags, candidate.tags),
            rating=self.config.rating_weight * min(max(candidate.rating / 5.0, 0.0), 1.0),
            context=self.config.context_weight * context_affinity(seeker, candidate),
            verified=self.config.verified_bonus if candidate.verified else 0.0,
        )

    @staticmethod
    def finalize(breakdown: ScoreBreakdown) -> int:
        """Clamp a breakdown's total to [0, 100] and round half-up."""
        return round_half_up(min(max(breakdown.total, 0.0), 100.0))


def tag_overlap(seeker_tags: AbstractSet[str], candidate_tags: AbstractSet[str]) -> float:
    """Jaccard ratio of two tag sets; 0.0 when both are empty."""
    union = seeker_tags | candidate_tags
    if not union:
        return 0.0
    return len(seeker_tags & candidate_tags) / len(union)


def location_affinity(seeker_location: str, candidate_location: str) -> float:
    """1.0 for the same place, 0.7 when one contains the other, else 0.0."""
    seeker_location = seeker_location.strip().casefold()
    candidate_location = candidate_location.strip().casefold()
    if not seeker_location or not candidate_location:
        return 0.0
    if seeker_location == candidate_location:
        return 1.0
    if seeker_location in candidate_location or candidate_location in seeker_location:
        return PARTIAL_LOCATION_AFFINITY
    return 0.0


def context_affinity(seeker: SeekerContext, candidate: BaseProfile) -> float:
    """Mean of category alignment and location alignment, in [0, 1]."""
    category = candidate.category.strip().casefold()
    category_match = 1.0 if category and category in seeker.categories else 0.0
    return (category_match + location_affinity(seeker.location, candidate.location)) / 2.0
