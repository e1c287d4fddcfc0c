"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from matchmaker.domain.models import (
    CreatorProfile,
    FilterSpec,
    ParticipantKind,
    Platform,
    ReachEstimate,
    RewardType,
    SortKey,
    SponsorProfile,
    TargetingCriteria,
    parse_profile,
)


class TestCreatorProfile:
    """Tests for CreatorProfile model."""

    def test_valid_creator(self):
        """Test creating a valid CreatorProfile."""
        creator = CreatorProfile(
            id="creator-001",
            display_name="Style by Maya",
            location="New York",
            rating=4.6,
            rating_count=38,
            tags=["fashion", "sustainable"],
            verified=True,
            platform="instagram",
            niche="Fashion",
            follower_count=48000,
            engagement_rate=5.2,
        )

        assert creator.kind == "creator"
        assert creator.platform == Platform.INSTAGRAM
        assert creator.tags == frozenset({"fashion", "sustainable"})
        assert creator.category == "Fashion"

    def test_creator_strips_whitespace(self):
        """Test that text fields are stripped of whitespace."""
        creator = CreatorProfile(
            id="  creator-001  ", display_name="  Maya  ", location="  Austin  "
        )

        assert creator.id == "creator-001"
        assert creator.display_name == "Maya"
        assert creator.location == "Austin"

    def test_platform_is_case_insensitive(self):
        """Test that platform names are accepted in any case."""
        creator = CreatorProfile(id="c1", display_name="C", platform="TikTok")

        assert creator.platform == Platform.TIKTOK

    def test_unknown_platform_rejected(self):
        with pytest.raises(ValidationError):
            CreatorProfile(id="c1", display_name="C", platform="myspace")

    def test_rejects_empty_id(self):
        """Test that required fields cannot be blank."""
        with pytest.raises(ValidationError):
            CreatorProfile(id="   ", display_name="C")

    @pytest.mark.parametrize("rating", [-0.1, 5.01])
    def test_rating_must_be_within_bounds(self, rating):
        with pytest.raises(ValidationError):
            CreatorProfile(id="c1", display_name="C", rating=rating)

    @pytest.mark.parametrize(
        "field,value",
        [("rating_count", -1), ("follower_count", -5), ("engagement_rate", -0.5)],
    )
    def test_counts_must_be_non_negative(self, field, value):
        with pytest.raises(ValidationError):
            CreatorProfile(id="c1", display_name="C", **{field: value})

    def test_duplicate_tags_rejected(self):
        """Test that a tag list repeating an entry is rejected, not collapsed."""
        with pytest.raises(ValidationError) as exc_info:
            CreatorProfile(id="c1", display_name="C", tags=["fashion", "beauty", "fashion"])

        assert "Duplicate tags: fashion" in str(exc_info.value)

    @pytest.mark.parametrize("tag", [["fashion"], {"name": "fashion"}, 7])
    def test_non_string_tags_rejected(self, tag):
        with pytest.raises(ValidationError) as exc_info:
            CreatorProfile(id="c1", display_name="C", tags=["beauty", tag])

        assert "Tags must be strings" in str(exc_info.value)

    def test_tags_are_case_sensitive(self):
        """Test that tags differing only in case are distinct."""
        creator = CreatorProfile(id="c1", display_name="C", tags=["Fashion", "fashion"])

        assert len(creator.tags) == 2

    def test_profile_is_immutable(self):
        creator = CreatorProfile(id="c1", display_name="C")

        with pytest.raises(ValidationError):
            creator.follower_count = 10

    def test_serializes_tags_sorted(self):
        creator = CreatorProfile(id="c1", display_name="C", tags=["zeta", "alpha", "mid"])

        assert creator.model_dump(mode="json")["tags"] == ["alpha", "mid", "zeta"]


class TestSponsorProfile:
    """Tests for SponsorProfile model."""

    def test_valid_sponsor(self):
        sponsor = SponsorProfile(
            id="sponsor-001",
            display_name="Glow Botanics",
            industry="Beauty",
            reward_type="Both",
            average_reward=450,
        )

        assert sponsor.kind == "sponsor"
        assert sponsor.reward_type == RewardType.BOTH
        assert sponsor.category == "Beauty"

    def test_negative_average_reward_rejected(self):
        with pytest.raises(ValidationError):
            SponsorProfile(id="s1", display_name="S", average_reward=-1)

    def test_unknown_reward_type_rejected(self):
        with pytest.raises(ValidationError):
            SponsorProfile(id="s1", display_name="S", reward_type="equity")


class TestParseProfile:
    """Tests for parse_profile helper."""

    def test_dispatches_on_kind(self):
        creator = parse_profile({"id": "c1", "display_name": "C", "kind": "creator"})
        sponsor = parse_profile({"id": "s1", "display_name": "S", "kind": "sponsor"})

        assert isinstance(creator, CreatorProfile)
        assert isinstance(sponsor, SponsorProfile)

    def test_expected_kind_fills_missing_kind(self):
        profile = parse_profile({"id": "s1", "display_name": "S"}, ParticipantKind.SPONSOR)

        assert isinstance(profile, SponsorProfile)

    def test_kind_mismatch_rejected(self):
        with pytest.raises(ValueError, match="declares kind 'creator'"):
            parse_profile(
                {"id": "c1", "display_name": "C", "kind": "creator"}, ParticipantKind.SPONSOR
            )

    def test_missing_kind_without_expected_kind_rejected(self):
        with pytest.raises(ValidationError):
            parse_profile({"id": "c1", "display_name": "C"})


class TestFilterSpec:
    """Tests for FilterSpec model."""

    def test_defaults_are_unconstrained(self):
        spec = FilterSpec()

        assert spec.query is None
        assert spec.categories == []
        assert spec.tags == []
        assert spec.reward_type is None
        assert spec.sort_by == SortKey.RELEVANCE
        assert spec.min_match_score is None

    def test_blank_query_and_location_become_none(self):
        spec = FilterSpec(query="   ", location="")

        assert spec.query is None
        assert spec.location is None

    def test_terms_are_stripped_and_deduplicated(self):
        spec = FilterSpec(categories=[" Fashion ", "Fashion", "", "Beauty"], tags=["a", " a", "b"])

        assert spec.categories == ["Fashion", "Beauty"]
        assert spec.tags == ["a", "b"]

    def test_enum_values_are_case_insensitive(self):
        spec = FilterSpec(sort_by="Followers", reward_type="PRODUCT")

        assert spec.sort_by == SortKey.FOLLOWERS
        assert spec.reward_type == RewardType.PRODUCT

    def test_unknown_sort_key_rejected(self):
        with pytest.raises(ValidationError):
            FilterSpec(sort_by="newest")

    def test_ranges_are_not_checked_by_the_model(self):
        """Test that min > max is left for the predicate builder to report."""
        spec = FilterSpec(min_followers=10, max_followers=1)

        assert spec.min_followers == 10


class TestEstimationModels:
    """Tests for TargetingCriteria and ReachEstimate."""

    def test_targeting_criteria_defaults(self):
        criteria = TargetingCriteria()

        assert criteria.min_followers == 0
        assert criteria.min_engagement_percent == 0.0
        assert criteria.posts_required == 1

    def test_reach_estimate_is_non_negative(self):
        with pytest.raises(ValidationError):
            ReachEstimate(total_reach=-1, engagement_interactions=0)
