"""Request and response models for the matchmaker service."""

from typing import List, Optional

from pydantic import BaseModel, Field

from matchmaker.domain.models import FilterSpec, ParticipantKind, Profile
from matchmaker.matching.models import MatchResult, RankedPage


class DiscoveryRequest(BaseModel):
    """One discovery query.

    Attributes:
        participant_kind: Which side of the marketplace to search
        filters: Search filters and sort key
        page: 1-based page number
        page_size: Results per page; the configured default when omitted
        seeker: Profile of the participant searching. When given, match
            scores use its tags, category and location instead of the filters.
    """

    participant_kind: ParticipantKind
    filters: FilterSpec = Field(default_factory=FilterSpec)
    page: int = 1
    page_size: Optional[int] = None
    seeker: Optional[Profile] = None


class DiscoveryResponse(BaseModel):
    """One page of discovery results."""

    items: List[MatchResult] = Field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = 1

    @classmethod
    def from_page(cls, ranked_page: RankedPage) -> "DiscoveryResponse":
        return cls(
            items=ranked_page.items,
            total_count=ranked_page.total_count,
            total_pages=ranked_page.total_pages,
            page=ranked_page.page,
            page_size=ranked_page.page_size,
        )


class SuggestionRequest(BaseModel):
    """Inputs of the content suggestion step of offer creation."""

    category: str = ""
    content_type: str = ""
    reward_type: str = ""
