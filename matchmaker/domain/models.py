"""Core domain models for profiles, search filters and campaign targeting.

This module defines the data structures used throughout the application:
- CreatorProfile / SponsorProfile: the two marketplace sides, unified as Profile
- FilterSpec: a participant's structured search intent
- TargetingCriteria: input for campaign reach estimation
- ReachEstimate: estimated reach and engagement for a campaign

All models are frozen; the engine only reads them and derives new values.
"""

from enum import Enum
from typing import Annotated, Any, FrozenSet, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_serializer, field_validator


class ParticipantKind(str, Enum):
    """The two sides of the marketplace."""

    CREATOR = "creator"
    SPONSOR = "sponsor"


class Platform(str, Enum):
    """Primary social platform of a creator."""

    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    OTHER = "other"


class RewardType(str, Enum):
    """How a sponsor compensates creators."""

    MONETARY = "monetary"
    PRODUCT = "product"
    BOTH = "both"


class SortKey(str, Enum):
    """Ordering requested for discovery results."""

    RELEVANCE = "relevance"
    ENGAGEMENT = "engagement"
    FOLLOWERS = "followers"
    RATING = "rating"


def _lowercase_enum_input(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip().lower()
    return v


class BaseProfile(BaseModel):
    """Attributes shared by creator and sponsor profiles.

    Tags are stored as a frozenset. Input may be a list, but a list containing
    the same tag twice (case-sensitive) is rejected rather than silently
    collapsed.
    """

    id: str = Field(..., description="Unique, immutable profile identifier")
    display_name: str = Field(..., description="Name shown in listings")
    location: str = Field("", description="Free-text location")
    description: str = Field("", description="Bio or business description")
    rating: float = Field(0.0, ge=0, le=5, description="Average rating (0-5)")
    rating_count: int = Field(0, ge=0, description="Number of ratings received")
    tags: FrozenSet[str] = Field(default_factory=frozenset, description="Profile tags")
    verified: bool = Field(False, description="Whether the profile is verified")

    model_config = {"frozen": True}

    @field_validator("id", "display_name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Strip whitespace from required string fields."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("location", "description", mode="before")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> str:
        """Strip whitespace from optional text fields; None becomes empty."""
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def reject_duplicate_tags(cls, v: Any) -> Any:
        """Reject tag lists that repeat an entry or hold anything but strings."""
        if v is None:
            return frozenset()
        if isinstance(v, (list, tuple)):
            seen = set()
            duplicates = set()
            for tag in v:
                if not isinstance(tag, str):
                    raise ValueError(f"Tags must be strings, got: {tag!r}")
                if tag in seen:
                    duplicates.add(tag)
                seen.add(tag)
            if duplicates:
                raise ValueError(f"Duplicate tags: {', '.join(sorted(duplicates))}")
        return v

    @field_serializer("tags")
    def serialize_tags(self, tags: FrozenSet[str]) -> List[str]:
        """Serialise tags in a stable order."""
        return sorted(tags)

    @property
    def category(self) -> str:
        """Niche (creators) or industry (sponsors)."""
        return ""


class CreatorProfile(BaseProfile):
    """A content creator offering sponsored posts."""

    kind: Literal["creator"] = "creator"
    platform: Platform = Field(Platform.OTHER, description="Primary platform")
    niche: str = Field("", description="Content niche, e.g. fashion")
    follower_count: int = Field(0, ge=0, description="Audience size")
    engagement_rate: float = Field(0.0, ge=0, description="Engagement rate percentage")

    @field_validator("platform", mode="before")
    @classmethod
    def normalize_platform(cls, v: Any) -> Any:
        """Accept platform names in any case ("Instagram")."""
        return _lowercase_enum_input(v)

    @property
    def category(self) -> str:
        return self.niche

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "creator-001",
                "kind": "creator",
                "display_name": "Style by Maya",
                "location": "New York",
                "description": "Everyday outfits and sustainable fashion finds",
                "rating": 4.6,
                "rating_count": 38,
                "tags": ["fashion", "sustainable"],
                "verified": True,
                "platform": "instagram",
                "niche": "Fashion",
                "follower_count": 48000,
                "engagement_rate": 5.2,
            }
        },
    }


class SponsorProfile(BaseProfile):
    """A business offering rewards for sponsored content."""

    kind: Literal["sponsor"] = "sponsor"
    industry: str = Field("", description="Business industry, e.g. beauty")
    reward_type: RewardType = Field(RewardType.MONETARY, description="Reward offered")
    average_reward: float = Field(0.0, ge=0, description="Average reward amount")

    @field_validator("reward_type", mode="before")
    @classmethod
    def normalize_reward_type(cls, v: Any) -> Any:
        """Accept reward types in any case."""
        return _lowercase_enum_input(v)

    @property
    def category(self) -> str:
        return self.industry

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "sponsor-001",
                "kind": "sponsor",
                "display_name": "Glow Botanics",
                "location": "Los Angeles",
                "description": "Clean skincare made in small batches",
                "rating": 4.2,
                "rating_count": 71,
                "tags": ["eco-friendly", "luxury"],
                "verified": True,
                "industry": "Beauty",
                "reward_type": "both",
                "average_reward": 450,
            }
        },
    }


Profile = Annotated[Union[CreatorProfile, SponsorProfile], Field(discriminator="kind")]

_PROFILE_ADAPTER: TypeAdapter = TypeAdapter(Profile)


def parse_profile(data: Mapping[str, Any], kind: Optional[ParticipantKind] = None) -> Union[CreatorProfile, SponsorProfile]:
    """Validate a raw mapping into the matching profile variant.

    Args:
        data: Raw profile attributes (e.g. from YAML or JSON)
        kind: Expected participant kind. Fills in a missing ``kind`` key and
            rejects a record that declares a different one.

    Returns:
        CreatorProfile or SponsorProfile

    Raises:
        pydantic.ValidationError: If the data does not describe a valid profile
        ValueError: If the record's kind contradicts ``kind``
    """
    payload = dict(data)
    if kind is not None:
        expected = ParticipantKind(kind).value
        declared = payload.setdefault("kind", expected)
        if declared != expected:
            raise ValueError(
                f"Profile {payload.get('id')!r} declares kind {declared!r}, expected {expected!r}"
            )
    return _PROFILE_ADAPTER.validate_python(payload)


class FilterSpec(BaseModel):
    """Structured search intent. Every field is optional; absence means unconstrained.

    Ranges are not checked here: the predicate builder validates them and raises
    InvalidFilterError so callers get one error type for a malformed filter.
    """

    query: Optional[str] = Field(None, description="Free-text query over name/description")
    categories: List[str] = Field(default_factory=list, description="Accepted categories (OR)")
    location: Optional[str] = Field(None, description="Location substring")
    min_engagement: Optional[float] = Field(None, description="Minimum engagement rate %")
    max_engagement: Optional[float] = Field(None, description="Maximum engagement rate %")
    min_followers: Optional[int] = Field(None, description="Minimum follower count")
    max_followers: Optional[int] = Field(None, description="Maximum follower count")
    reward_type: Optional[RewardType] = Field(None, description="Required reward type")
    tags: List[str] = Field(default_factory=list, description="Required tags (AND)")
    sort_by: SortKey = Field(SortKey.RELEVANCE, description="Result ordering")
    min_match_score: Optional[int] = Field(None, description="Drop results scoring below this")

    model_config = {"frozen": True}

    @field_validator("reward_type", "sort_by", mode="before")
    @classmethod
    def normalize_enums(cls, v: Any) -> Any:
        """Accept enum values in any case."""
        return _lowercase_enum_input(v)

    @field_validator("query", "location")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank text as unconstrained."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @field_validator("categories", "tags")
    @classmethod
    def normalize_terms(cls, v: List[str]) -> List[str]:
        """Strip whitespace, drop empty entries and duplicates (order kept)."""
        normalized = []
        for term in v:
            stripped = term.strip()
            if stripped and stripped not in normalized:
                normalized.append(stripped)
        return normalized


class TargetingCriteria(BaseModel):
    """Targeting criteria of a new collaboration offer.

    Range checks live in the estimator so every entry point reports
    InvalidInputError for negative values.
    """

    min_followers: int = Field(0, description="Minimum follower count of participating creators")
    min_engagement_percent: float = Field(0.0, description="Minimum engagement rate %")
    posts_required: int = Field(1, description="Number of posts each creator commits to")

    model_config = {"frozen": True}


class ReachEstimate(BaseModel):
    """Estimated campaign reach. Recomputed on demand, never stored."""

    total_reach: int = Field(..., ge=0, description="Estimated audience members reached")
    engagement_interactions: int = Field(..., ge=0, description="Estimated interactions")

    model_config = {"frozen": True}
