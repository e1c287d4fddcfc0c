"""Matchmaker service: request-level entry points over the engine."""

from .discovery import MatchmakerService
from .models import DiscoveryRequest, DiscoveryResponse, SuggestionRequest

__all__ = [
    "MatchmakerService",
    "DiscoveryRequest",
    "DiscoveryResponse",
    "SuggestionRequest",
]
