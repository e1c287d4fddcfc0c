"""Profile builders for deterministic tests.

Builders fill in neutral defaults (no tags, rating 0, unverified, empty
location) so a test only spells out the attributes it is about.
"""

from pathlib import Path
from typing import Any

from matchmaker.catalog import InMemoryCatalog, YamlCatalog
from matchmaker.domain.models import CreatorProfile, ParticipantKind, SponsorProfile

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def make_creator(profile_id: str, **overrides: Any) -> CreatorProfile:
    """Build a CreatorProfile with neutral defaults."""
    data = {
        "id": profile_id,
        "display_name": f"Creator {profile_id}",
        "platform": "instagram",
        "niche": "",
        "follower_count": 0,
        "engagement_rate": 0.0,
    }
    data.update(overrides)
    return CreatorProfile(**data)


def make_sponsor(profile_id: str, **overrides: Any) -> SponsorProfile:
    """Build a SponsorProfile with neutral defaults."""
    data = {
        "id": profile_id,
        "display_name": f"Sponsor {profile_id}",
        "industry": "",
        "reward_type": "monetary",
        "average_reward": 0.0,
    }
    data.update(overrides)
    return SponsorProfile(**data)


def load_fixture_catalog(fixture_name: str = "profiles.yaml") -> InMemoryCatalog:
    """Load a YAML fixture once and serve it from memory."""
    source = YamlCatalog(FIXTURES_DIR / fixture_name)
    profiles = source.fetch_profiles(ParticipantKind.CREATOR) + source.fetch_profiles(
        ParticipantKind.SPONSOR
    )
    return InMemoryCatalog(profiles)
