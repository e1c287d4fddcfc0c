"""Discovery matching: filtering, scoring and ranking of candidate profiles.

This module provides:
- FilterPredicateBuilder / build_predicate: FilterSpec -> profile predicate
- MatchScorer / SeekerContext: 0-100 match scores with a per-component breakdown
- RankingEngine: filter, score, sort and paginate candidates
- MatchResult / RankedPage / ScoreBreakdown: per-request result values
"""

from .filters import FilterPredicateBuilder, Predicate, build_predicate
from .models import MatchResult, RankedPage, ScoreBreakdown
from .ranking import RankingEngine, require_positive_int, sort_metric
from .scoring import MatchScorer, SeekerContext, round_half_up, tag_overlap

__all__ = [
    "FilterPredicateBuilder",
    "Predicate",
    "build_predicate",
    "MatchScorer",
    "SeekerContext",
    "RankingEngine",
    "MatchResult",
    "RankedPage",
    "ScoreBreakdown",
    "require_positive_int",
    "round_half_up",
    "sort_metric",
    "tag_overlap",
]
