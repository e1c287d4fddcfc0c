"""Unit tests for profile catalogs."""

from unittest.mock import Mock, patch

import pytest
import requests

from matchmaker.catalog import (
    BaseCatalog,
    CatalogConfigurationError,
    CatalogUnavailableError,
    HttpCatalog,
    InMemoryCatalog,
    YamlCatalog,
    get_catalog,
)
from matchmaker.config.models import CatalogConfig
from matchmaker.domain.models import CreatorProfile, ParticipantKind, SponsorProfile
from tests.helpers import make_creator, make_sponsor


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def http_catalog():
    return HttpCatalog(base_url="https://profiles.example.com/api/", timeout=10)


@pytest.fixture
def creator_records():
    return [
        {"id": "c1", "display_name": "Creator One", "follower_count": 100},
        {"id": "c2", "display_name": "Creator Two", "platform": "YouTube"},
    ]


def mock_response(status_code=200, json_data=None, json_error=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


# ============================================================================
# Base Catalog Tests
# ============================================================================


class TestBaseCatalog:
    def test_cannot_instantiate_abstract_class(self):
        with pytest.raises(TypeError):
            BaseCatalog()


# ============================================================================
# In-Memory Catalog Tests
# ============================================================================


class TestInMemoryCatalog:
    def test_fetch_filters_by_kind_in_order(self):
        catalog = InMemoryCatalog(
            [make_creator("c2"), make_sponsor("s1"), make_creator("c1")]
        )

        creators = catalog.fetch_profiles(ParticipantKind.CREATOR)
        sponsors = catalog.fetch_profiles("sponsor")

        assert [p.id for p in creators] == ["c2", "c1"]
        assert [p.id for p in sponsors] == ["s1"]

    def test_same_id_allowed_across_kinds(self):
        catalog = InMemoryCatalog([make_creator("x"), make_sponsor("x")])

        assert len(catalog.fetch_profiles(ParticipantKind.CREATOR)) == 1

    def test_duplicate_id_rejected(self):
        with pytest.raises(CatalogConfigurationError, match="Duplicate creator profile id"):
            InMemoryCatalog([make_creator("x"), make_creator("x")])


# ============================================================================
# YAML Catalog Tests
# ============================================================================


class TestYamlCatalog:
    def test_loads_fixture(self, profiles_path):
        catalog = YamlCatalog(profiles_path)

        creators = catalog.fetch_profiles(ParticipantKind.CREATOR)
        sponsors = catalog.fetch_profiles(ParticipantKind.SPONSOR)

        assert [p.id for p in creators] == [
            "creator-a",
            "creator-b",
            "creator-c",
            "creator-d",
            "creator-e",
        ]
        assert all(isinstance(p, CreatorProfile) for p in creators)
        assert all(isinstance(p, SponsorProfile) for p in sponsors)
        assert len(sponsors) == 3

    def test_missing_section_is_empty(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("creators:\n  - id: c1\n    display_name: C\n")

        assert YamlCatalog(path).fetch_profiles(ParticipantKind.SPONSOR) == []

    def test_empty_file_is_empty_catalog(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("")

        assert YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR) == []

    def test_file_is_reread_on_every_fetch(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("creators:\n  - id: c1\n    display_name: C\n")
        catalog = YamlCatalog(path)
        assert len(catalog.fetch_profiles(ParticipantKind.CREATOR)) == 1

        path.write_text("creators: []\n")

        assert catalog.fetch_profiles(ParticipantKind.CREATOR) == []

    def test_missing_file(self, tmp_path):
        catalog = YamlCatalog(tmp_path / "nope.yaml")

        with pytest.raises(CatalogUnavailableError) as exc_info:
            catalog.fetch_profiles(ParticipantKind.CREATOR)

        assert exc_info.value.url == str(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("creators:\n  - id: 'broken\n")

        with pytest.raises(CatalogUnavailableError, match="Failed to parse"):
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("- id: c1\n")

        with pytest.raises(CatalogUnavailableError, match="mapping"):
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

    def test_section_must_be_list(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("creators:\n  id: c1\n")

        with pytest.raises(CatalogUnavailableError, match="must be a list"):
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

    def test_invalid_record_fails_whole_fetch(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text(
            "creators:\n"
            "  - id: c1\n    display_name: Good\n"
            "  - id: c2\n    display_name: Bad\n    rating: 9\n"
        )

        with pytest.raises(CatalogUnavailableError, match="record 1"):
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text(
            "creators:\n"
            "  - id: c1\n    display_name: One\n"
            "  - id: c1\n    display_name: Two\n"
        )

        with pytest.raises(CatalogUnavailableError, match="Duplicate creator profile id"):
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

    def test_nested_tag_values_rejected(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("creators:\n  - id: c1\n    display_name: C\n    tags: [[fashion]]\n")

        with pytest.raises(CatalogUnavailableError, match="record 0"):
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

    def test_file_not_utf8(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_bytes(b"creators:\n  - id: c1\n    display_name: \xff\xfe\n")

        with pytest.raises(CatalogUnavailableError, match="not valid UTF-8") as exc_info:
            YamlCatalog(path).fetch_profiles(ParticipantKind.CREATOR)

        assert exc_info.value.url == str(path)

    def test_record_of_wrong_kind_rejected(self, tmp_path):
        path = tmp_path / "profiles.yaml"
        path.write_text("sponsors:\n  - id: c1\n    kind: creator\n    display_name: C\n")

        with pytest.raises(CatalogUnavailableError):
            YamlCatalog(path).fetch_profiles(ParticipantKind.SPONSOR)


# ============================================================================
# HTTP Catalog Tests
# ============================================================================


class TestHttpCatalog:
    def test_initialization(self, http_catalog):
        assert http_catalog.base_url == "https://profiles.example.com/api"
        assert http_catalog.timeout == 10
        assert http_catalog._session.headers["User-Agent"] == "CreatorSponsorMatchmaker/1.0"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_url": "ftp://example.com"},
            {"base_url": ""},
            {"base_url": "https://example.com", "timeout": 1},
            {"base_url": "https://example.com", "user_agent": "  "},
        ],
    )
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(CatalogConfigurationError):
            HttpCatalog(**kwargs)

    def test_fetch_list_response(self, http_catalog, creator_records):
        with patch.object(
            http_catalog._session, "get", return_value=mock_response(json_data=creator_records)
        ) as mock_get:
            profiles = http_catalog.fetch_profiles(ParticipantKind.CREATOR)

        mock_get.assert_called_once_with("https://profiles.example.com/api/creators", timeout=10)
        assert [p.id for p in profiles] == ["c1", "c2"]
        assert profiles[1].platform.value == "youtube"

    def test_fetch_wrapped_response(self, http_catalog):
        payload = {"profiles": [{"id": "s1", "display_name": "Sponsor", "reward_type": "both"}]}

        with patch.object(http_catalog, "_get_json", return_value=payload):
            profiles = http_catalog.fetch_profiles(ParticipantKind.SPONSOR)

        assert isinstance(profiles[0], SponsorProfile)

    def test_unexpected_payload_shape(self, http_catalog):
        with patch.object(http_catalog, "_get_json", return_value={"items": []}):
            with pytest.raises(CatalogUnavailableError, match="Expected a list"):
                http_catalog.fetch_profiles(ParticipantKind.CREATOR)

    def test_invalid_record(self, http_catalog):
        with patch.object(http_catalog, "_get_json", return_value=[{"id": "c1"}]):
            with pytest.raises(CatalogUnavailableError, match="Invalid creator profile record 0"):
                http_catalog.fetch_profiles(ParticipantKind.CREATOR)

    def test_mapping_tag_value(self, http_catalog):
        record = {"id": "c1", "display_name": "C", "tags": [{"name": "fashion"}]}

        with patch.object(http_catalog, "_get_json", return_value=[record]):
            with pytest.raises(CatalogUnavailableError, match="Invalid creator profile record 0"):
                http_catalog.fetch_profiles(ParticipantKind.CREATOR)

    def test_timeout(self, http_catalog):
        with patch.object(
            http_catalog._session, "get", side_effect=requests.exceptions.Timeout("slow")
        ):
            with pytest.raises(CatalogUnavailableError, match="timed out"):
                http_catalog.fetch_profiles(ParticipantKind.CREATOR)

    def test_connection_error(self, http_catalog):
        with patch.object(
            http_catalog._session,
            "get",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(CatalogUnavailableError, match="failed"):
                http_catalog.fetch_profiles(ParticipantKind.SPONSOR)

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_http_error_status(self, http_catalog, status_code):
        with patch.object(
            http_catalog._session,
            "get",
            return_value=mock_response(status_code=status_code, reason="Error"),
        ):
            with pytest.raises(CatalogUnavailableError) as exc_info:
                http_catalog.fetch_profiles(ParticipantKind.CREATOR)

        assert exc_info.value.status_code == status_code
        assert exc_info.value.url == "https://profiles.example.com/api/creators"

    def test_invalid_json(self, http_catalog):
        with patch.object(
            http_catalog._session,
            "get",
            return_value=mock_response(json_error=ValueError("Expecting value")),
        ):
            with pytest.raises(CatalogUnavailableError, match="Failed to parse JSON"):
                http_catalog.fetch_profiles(ParticipantKind.CREATOR)


# ============================================================================
# Factory Tests
# ============================================================================


class TestGetCatalog:
    def test_yaml_catalog(self, profiles_path):
        catalog = get_catalog(CatalogConfig(type="yaml", path=str(profiles_path)))

        assert isinstance(catalog, YamlCatalog)
        assert catalog.path == profiles_path

    def test_http_catalog(self):
        catalog = get_catalog(
            CatalogConfig(type="http", url="https://profiles.example.com", timeout=15)
        )

        assert isinstance(catalog, HttpCatalog)
        assert catalog.timeout == 15

    def test_unknown_type(self):
        config = CatalogConfig(type="yaml", path="profiles.yaml")
        config.type = "sql"

        with pytest.raises(CatalogConfigurationError, match="Unknown catalog type"):
            get_catalog(config)
