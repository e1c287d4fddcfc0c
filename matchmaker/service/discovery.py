"""Request orchestration for discovery, estimation and suggestions."""

import time
from typing import List, Optional
from uuid import uuid4

from matchmaker.campaigns.estimator import ReachEstimator
from matchmaker.campaigns.suggestions import SuggestionGenerator
from matchmaker.catalog.base import BaseCatalog
from matchmaker.catalog.exceptions import CatalogConfigurationError, CatalogError
from matchmaker.catalog.factory import get_catalog
from matchmaker.config.models import AppConfig, RankingConfig
from matchmaker.domain.exceptions import InvalidInputError, MatchmakerError
from matchmaker.domain.models import (
    BaseProfile,
    FilterSpec,
    ParticipantKind,
    ReachEstimate,
    TargetingCriteria,
)
from matchmaker.logging import get_logger
from matchmaker.logging.context import log_context
from matchmaker.matching.filters import FilterPredicateBuilder
from matchmaker.matching.models import MatchResult
from matchmaker.matching.ranking import RankingEngine, require_positive_int
from matchmaker.matching.scoring import MatchScorer, SeekerContext

from .models import DiscoveryRequest, DiscoveryResponse, SuggestionRequest

logger = get_logger(__name__, component="service")


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class MatchmakerService:
    """
    Entry point for the marketplace's discovery and campaign operations.

    Each call runs to completion in a log context carrying its own request_id.
    The service holds no per-request state, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        catalog: Optional[BaseCatalog] = None,
        ranking_engine: Optional[RankingEngine] = None,
        estimator: Optional[ReachEstimator] = None,
        suggestion_generator: Optional[SuggestionGenerator] = None,
        ranking_config: Optional[RankingConfig] = None,
    ):
        """
        Initialize the service.

        Args:
            catalog: Source of candidate profiles (required for discovery only)
            ranking_engine: Filters, scores and paginates candidates
            estimator: Campaign reach estimator
            suggestion_generator: Content suggestion generator
            ranking_config: Default and maximum page sizes
        """
        self.catalog = catalog
        self.ranking_engine = ranking_engine or RankingEngine()
        self.estimator = estimator or ReachEstimator()
        self.suggestion_generator = suggestion_generator or SuggestionGenerator()
        self.ranking_config = ranking_config or RankingConfig()

    @classmethod
    def from_config(
        cls, app_config: AppConfig, catalog: Optional[BaseCatalog] = None
    ) -> "MatchmakerService":
        """
        Build a service from application configuration.

        Args:
            app_config: Validated application configuration
            catalog: Catalog to use instead of the configured one

        Returns:
            MatchmakerService wired with configured collaborators

        Raises:
            CatalogConfigurationError: If the configured catalog is unusable
        """
        if catalog is None and app_config.catalog is not None:
            catalog = get_catalog(app_config.catalog)

        return cls(
            catalog=catalog,
            ranking_engine=RankingEngine(
                scorer=MatchScorer(app_config.scoring),
                predicate_builder=FilterPredicateBuilder(),
            ),
            estimator=ReachEstimator(app_config.estimator),
            suggestion_generator=SuggestionGenerator(),
            ranking_config=app_config.ranking,
        )

    def discover(self, request: DiscoveryRequest) -> DiscoveryResponse:
        """
        Run one discovery query.

        The filter and pagination parameters are validated before the catalog
        is read, so a malformed request never triggers a fetch.

        Args:
            request: Discovery query

        Returns:
            DiscoveryResponse with one page of ranked results

        Raises:
            InvalidFilterError: If the filter is malformed
            InvalidInputError: If page or page_size is out of range
            CatalogUnavailableError: If the catalog cannot deliver profiles
            CatalogConfigurationError: If no catalog is configured
        """
        started = time.monotonic()
        kind = ParticipantKind(request.participant_kind)

        with log_context(request_id=uuid4().hex, participant_kind=kind.value):
            logger.info(
                "Discovery request started",
                extra={
                    "event": "discovery.request.started",
                    "page": request.page,
                    "page_size": request.page_size,
                    "sort_by": request.filters.sort_by.value,
                },
            )

            try:
                page_size = self._resolve_page_size(request.page_size)
                require_positive_int("page", request.page)
                self.ranking_engine.predicate_builder.validate(request.filters)

                candidates = self._fetch(kind)
                ranked_page = self.ranking_engine.rank(
                    candidates,
                    request.filters,
                    page=request.page,
                    page_size=page_size,
                    seeker=self._seeker_context(request.seeker),
                )
            except MatchmakerError as e:
                self._log_failure("discovery", e, started)
                raise

            response = DiscoveryResponse.from_page(ranked_page)

            logger.info(
                f"Discovery returned {len(response.items)} of {response.total_count} results",
                extra={
                    "event": "discovery.request.completed",
                    "candidate_count": len(candidates),
                    "total_count": response.total_count,
                    "total_pages": response.total_pages,
                    "page": response.page,
                    "page_size": response.page_size,
                    "returned": len(response.items),
                    "duration_ms": _elapsed_ms(started),
                },
            )

            return response

    def recommend(
        self,
        participant_kind: ParticipantKind,
        filters: Optional[FilterSpec] = None,
        limit: Optional[int] = None,
        seeker: Optional[BaseProfile] = None,
    ) -> List[MatchResult]:
        """
        Top matches by score, regardless of the filter's sort key.

        Args:
            participant_kind: Which side of the marketplace to search
            filters: Optional search filters
            limit: Number of results; the configured default page size when omitted
            seeker: Optional seeker profile to score against

        Returns:
            Up to ``limit`` MatchResults, best first

        Raises:
            InvalidFilterError: If the filter is malformed
            InvalidInputError: If limit is out of range
            CatalogUnavailableError: If the catalog cannot deliver profiles
            CatalogConfigurationError: If no catalog is configured
        """
        started = time.monotonic()
        kind = ParticipantKind(participant_kind)
        filters = filters or FilterSpec()

        with log_context(request_id=uuid4().hex, participant_kind=kind.value):
            try:
                limit = self._resolve_page_size(limit, name="limit")
                self.ranking_engine.predicate_builder.validate(filters)
                results = self.ranking_engine.recommend(
                    self._fetch(kind), filters, limit=limit, seeker=self._seeker_context(seeker)
                )
            except MatchmakerError as e:
                self._log_failure("recommendation", e, started)
                raise

            logger.info(
                f"Recommended {len(results)} profiles",
                extra={
                    "event": "recommendation.request.completed",
                    "limit": limit,
                    "returned": len(results),
                    "duration_ms": _elapsed_ms(started),
                },
            )

            return results

    def estimate(self, criteria: TargetingCriteria) -> ReachEstimate:
        """
        Estimate campaign reach for targeting criteria.

        Raises:
            InvalidInputError: If any criterion is negative or out of range
        """
        started = time.monotonic()

        with log_context(request_id=uuid4().hex):
            try:
                estimate = self.estimator.estimate_for(criteria)
            except MatchmakerError as e:
                self._log_failure("estimation", e, started)
                raise

            logger.info(
                "Campaign reach estimated",
                extra={
                    "event": "estimation.request.completed",
                    "total_reach": estimate.total_reach,
                    "engagement_interactions": estimate.engagement_interactions,
                    "duration_ms": _elapsed_ms(started),
                },
            )

            return estimate

    def suggest(self, request: SuggestionRequest) -> List[str]:
        """
        Content ideas for an offer.

        Raises:
            SuggestionTemplateError: If a suggestion template fails to render
        """
        with log_context(request_id=uuid4().hex):
            suggestions = self.suggestion_generator.suggest(
                request.category, request.content_type, request.reward_type
            )

            logger.info(
                f"Generated {len(suggestions)} content suggestions",
                extra={"event": "suggestion.request.completed", "returned": len(suggestions)},
            )

            return suggestions

    def _resolve_page_size(self, page_size: Optional[int], name: str = "page_size") -> int:
        if page_size is None:
            return self.ranking_config.default_page_size

        require_positive_int(name, page_size)
        if page_size > self.ranking_config.max_page_size:
            raise InvalidInputError(
                f"{name} cannot exceed {self.ranking_config.max_page_size}, got: {page_size}"
            )
        return page_size

    def _fetch(self, kind: ParticipantKind) -> List[BaseProfile]:
        if self.catalog is None:
            raise CatalogConfigurationError(
                "No catalog configured. Set catalog in config.yaml, or CATALOG_PATH / CATALOG_URL."
            )

        try:
            profiles = self.catalog.fetch_profiles(kind)
        except CatalogError as e:
            logger.error(
                f"Catalog fetch failed: {e}",
                extra={"event": "catalog.fetch.error", "error_type": type(e).__name__},
            )
            raise

        logger.debug(
            f"Fetched {len(profiles)} candidate profiles",
            extra={"event": "catalog.fetch.completed", "profile_count": len(profiles)},
        )
        return profiles

    @staticmethod
    def _seeker_context(seeker: Optional[BaseProfile]) -> Optional[SeekerContext]:
        if seeker is None:
            return None
        return SeekerContext.from_profile(seeker)

    @staticmethod
    def _log_failure(operation: str, error: Exception, started: float) -> None:
        logger.warning(
            f"{operation.capitalize()} request failed: {error}",
            extra={
                "event": f"{operation}.request.failed",
                "error_type": type(error).__name__,
                "duration_ms": _elapsed_ms(started),
            },
        )
