"""Ranking and pagination of discovery results.

This module implements the discovery pipeline over an already-fetched
candidate list:
1. Filter candidates with the FilterSpec predicate
2. Score every survivor against the seeker
3. Drop results under spec.min_match_score, if set
4. Sort by the requested key with deterministic tie-breaks
5. Slice out the requested page

The result depends only on the arguments, so repeated calls return the
same page.
"""

import math
from typing import Iterable, List, NamedTuple, Optional, Tuple

from matchmaker.domain.exceptions import InvalidInputError
from matchmaker.domain.models import BaseProfile, FilterSpec, SortKey
from matchmaker.logging import get_logger

from .filters import FilterPredicateBuilder
from .models import MatchResult, RankedPage, ScoreBreakdown
from .scoring import MatchScorer, SeekerContext

logger = get_logger(__name__, component="ranking")

# Attribute used for each numeric sort key, per profile kind. Sponsors have no
# audience metrics, so "engagement" ranks them by average reward and
# "followers" by rating count.
SORT_ATTRIBUTES = {
    SortKey.ENGAGEMENT: {"creator": "engagement_rate", "sponsor": "average_reward"},
    SortKey.FOLLOWERS: {"creator": "follower_count", "sponsor": "rating_count"},
    SortKey.RATING: {"creator": "rating", "sponsor": "rating"},
}


class _Scored(NamedTuple):
    profile: BaseProfile
    score: int
    breakdown: ScoreBreakdown


def sort_metric(profile: BaseProfile, sort_key: SortKey) -> float:
    """Numeric value a profile is ordered by for a non-relevance sort key."""
    attribute = SORT_ATTRIBUTES[SortKey(sort_key)][profile.kind]
    return float(getattr(profile, attribute))


def require_positive_int(name: str, value: int) -> None:
    """Raise InvalidInputError unless value is an int (not bool) >= 1."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(f"{name} must be an integer >= 1, got: {value!r}")


class RankingEngine:
    """Filters, scores, sorts and paginates candidate profiles."""

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        predicate_builder: Optional[FilterPredicateBuilder] = None,
    ):
        self.scorer = scorer or MatchScorer()
        self.predicate_builder = predicate_builder or FilterPredicateBuilder()

    def rank(
        self,
        candidates: Iterable[BaseProfile],
        spec: FilterSpec,
        page: int = 1,
        page_size: int = 8,
        seeker: Optional[SeekerContext] = None,
    ) -> RankedPage:
        """Produce one page of ranked results.

        Ordering:
        - relevance: score desc, then id asc
        - engagement / followers / rating: metric desc, score desc, id asc

        Args:
            candidates: Profiles to consider (not modified)
            spec: Filters and sort key
            page: 1-based page number; pages past the end are empty
            page_size: Results per page
            seeker: Seeker context for scoring; defaults to one derived from the filters

        Returns:
            RankedPage with the page's items and post-filter totals

        Raises:
            InvalidFilterError: If the filters are malformed
            InvalidInputError: If page or page_size is not a positive integer
        """
        require_positive_int("page", page)
        require_positive_int("page_size", page_size)

        scored = self._score_candidates(candidates, spec, seeker)
        scored.sort(key=self._sort_key(spec.sort_by))

        total_count = len(scored)
        total_pages = math.ceil(total_count / page_size)
        start = (page - 1) * page_size
        page_slice = scored[start : start + page_size]

        items = [
            MatchResult(profile=s.profile, match_score=s.score, rank=position, breakdown=s.breakdown)
            for position, s in enumerate(page_slice, 1)
        ]

        logger.debug(
            f"Ranked {total_count} results, returning page {page} of {total_pages}",
            extra={
                "event": "ranking.page.completed",
                "sort_by": SortKey(spec.sort_by).value,
                "total_count": total_count,
                "total_pages": total_pages,
                "page": page,
                "page_size": page_size,
                "returned": len(items),
            },
        )

        return RankedPage(
            items=items,
            total_count=total_count,
            total_pages=total_pages,
            page=page,
            page_size=page_size,
        )

    def recommend(
        self,
        candidates: Iterable[BaseProfile],
        spec: FilterSpec,
        limit: int = 8,
        seeker: Optional[SeekerContext] = None,
    ) -> List[MatchResult]:
        """Top ``limit`` matches by score, ignoring spec.sort_by.

        Raises:
            InvalidFilterError: If the filters are malformed
            InvalidInputError: If limit is not a positive integer
        """
        require_positive_int("limit", limit)

        scored = self._score_candidates(candidates, spec, seeker)
        scored.sort(key=self._sort_key(SortKey.RELEVANCE))

        return [
            MatchResult(profile=s.profile, match_score=s.score, rank=position, breakdown=s.breakdown)
            for position, s in enumerate(scored[:limit], 1)
        ]

    def _score_candidates(
        self,
        candidates: Iterable[BaseProfile],
        spec: FilterSpec,
        seeker: Optional[SeekerContext],
    ) -> List[_Scored]:
        predicate = self.predicate_builder.build(spec)
        seeker = seeker or SeekerContext.from_filter_spec(spec)

        scored: List[_Scored] = []
        for profile in candidates:
            if not predicate(profile):
                continue
            breakdown = self.scorer.breakdown(seeker, profile)
            score = self.scorer.finalize(breakdown)
            if spec.min_match_score is not None and score < spec.min_match_score:
                continue
            scored.append(_Scored(profile, score, breakdown))

        return scored

    @staticmethod
    def _sort_key(sort_by: SortKey):
        sort_by = SortKey(sort_by)

        if sort_by == SortKey.RELEVANCE:
            def key(s: _Scored) -> Tuple:
                return (-s.score, s.profile.id, s.profile.kind)
        else:
            def key(s: _Scored) -> Tuple:
                return (-sort_metric(s.profile, sort_by), -s.score, s.profile.id, s.profile.kind)

        return key
