"""Data models for match scoring and ranked result pages.

These values are computed per request and never persisted.
"""

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, Field

from matchmaker.domain.models import Profile


class ScoreBreakdown(BaseModel):
    """Points each component contributed to a match score, before rounding.

    Attributes:
        tag_overlap: Points from shared tags (Jaccard ratio times its weight)
        rating: Points from the candidate's rating
        context: Points from category and location alignment
        verified: Flat bonus for verified candidates
    """

    tag_overlap: float = 0.0
    rating: float = 0.0
    context: float = 0.0
    verified: float = 0.0

    model_config = {"frozen": True}

    @property
    def total(self) -> float:
        return self.tag_overlap + self.rating + self.context + self.verified


class MatchResult(BaseModel):
    """A candidate profile with its match score and position on the page.

    Attributes:
        profile: The candidate profile (unchanged)
        match_score: Integer score in [0, 100]
        rank: 1-based position within the current page
        breakdown: Per-component points behind match_score
    """

    profile: Profile
    match_score: int = Field(..., ge=0, le=100)
    rank: int = Field(..., ge=1)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)

    model_config = {"frozen": True}


@dataclass
class RankedPage:
    """One page of ranked discovery results.

    Attributes:
        items: Results on this page, in rank order
        total_count: Results after filtering, before pagination
        total_pages: ceil(total_count / page_size); 0 when nothing matched
        page: Requested page number (1-based)
        page_size: Requested page size
    """

    items: List[MatchResult] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
