"""Domain models and errors for the creator/sponsor matchmaker."""

from .exceptions import InvalidFilterError, InvalidInputError, MatchmakerError
from .models import (
    BaseProfile,
    CreatorProfile,
    FilterSpec,
    ParticipantKind,
    Platform,
    Profile,
    ReachEstimate,
    RewardType,
    SortKey,
    SponsorProfile,
    TargetingCriteria,
    parse_profile,
)

__all__ = [
    # Profiles
    "BaseProfile",
    "CreatorProfile",
    "SponsorProfile",
    "Profile",
    "parse_profile",
    # Requests and derived values
    "FilterSpec",
    "TargetingCriteria",
    "ReachEstimate",
    # Enums
    "ParticipantKind",
    "Platform",
    "RewardType",
    "SortKey",
    # Exceptions
    "MatchmakerError",
    "InvalidFilterError",
    "InvalidInputError",
]
