"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class CatalogType(str, Enum):
    """Supported profile catalog backends."""

    YAML = "yaml"
    HTTP = "http"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class CatalogConfig(BaseModel):
    """Where candidate profiles come from."""

    type: CatalogType = Field(CatalogType.YAML, description="Catalog backend (yaml, http)")
    path: Optional[str] = Field(None, description="Profile file for the yaml backend")
    url: Optional[str] = Field(None, description="Base URL for the http backend")
    timeout: int = Field(30, ge=5, le=300, description="HTTP request timeout (seconds)")
    user_agent: str = Field(
        "CreatorSponsorMatchmaker/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    model_config = {"use_enum_values": True}

    @field_validator("path", "url", "user_agent")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank optional values become None."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_backend_settings(self):
        """Each backend needs its own location setting."""
        if self.type == CatalogType.YAML.value and not self.path:
            raise ValueError("catalog.path is required when catalog.type is 'yaml'")
        if self.type == CatalogType.HTTP.value:
            if not self.url:
                raise ValueError("catalog.url is required when catalog.type is 'http'")
            if not self.url.startswith(("http://", "https://")):
                raise ValueError(f"catalog.url must be an http(s) URL, got: {self.url}")
        if not self.user_agent:
            raise ValueError("catalog.user_agent cannot be empty")
        return self


class ScoringConfig(BaseModel):
    """Point weights of the match score components. They must total 100."""

    tag_overlap_weight: float = Field(40.0, ge=0, description="Points for full tag overlap")
    rating_weight: float = Field(30.0, ge=0, description="Points for a 5-star rating")
    context_weight: float = Field(
        20.0, ge=0, description="Points for full category and location alignment"
    )
    verified_bonus: float = Field(10.0, ge=0, description="Flat points for verified profiles")

    @model_validator(mode="after")
    def validate_total(self):
        total = (
            self.tag_overlap_weight + self.rating_weight + self.context_weight + self.verified_bonus
        )
        if abs(total - 100.0) > 1e-9:
            raise ValueError(f"Scoring weights must total 100, got: {total:g}")
        return self


class RankingConfig(BaseModel):
    """Pagination limits for discovery requests."""

    default_page_size: int = Field(8, ge=1, description="Page size when a request omits it")
    max_page_size: int = Field(100, ge=1, description="Largest page size a request may ask for")

    @model_validator(mode="after")
    def validate_page_sizes(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"ranking.default_page_size ({self.default_page_size}) cannot exceed "
                f"ranking.max_page_size ({self.max_page_size})"
            )
        return self


class EstimatorConfig(BaseModel):
    """Constants of the campaign reach model.

    Follower counts across the creator pool are modelled as a Lomax
    distribution with ``follower_scale`` and ``follower_shape``.
    """

    pool_size: int = Field(1000, ge=1, description="Creators assumed to see a new offer")
    follower_scale: float = Field(10000.0, gt=0, description="Lomax scale of follower counts")
    follower_shape: float = Field(1.5, gt=1, description="Lomax shape (>1 for a finite mean)")
    participation_rate: float = Field(
        0.004, gt=0, le=1, description="Share of qualifying creators who claim an offer"
    )
    commitment_decay: float = Field(
        0.8, gt=0, le=1, description="Participation multiplier per additional required post"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format")

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the matchmaker."""

    catalog: Optional[CatalogConfig] = Field(None, description="Profile catalog source")
    scoring: ScoringConfig = Field(default_factory=ScoringConfig, description="Match score weights")
    ranking: RankingConfig = Field(default_factory=RankingConfig, description="Pagination limits")
    estimator: EstimatorConfig = Field(
        default_factory=EstimatorConfig, description="Reach estimation model"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
