"""Campaign planning helpers: reach estimation and content suggestions."""

from .estimator import ReachEstimator
from .exceptions import SuggestionTemplateError
from .suggestions import SUGGESTION_TEMPLATES, SuggestionGenerator

__all__ = [
    "ReachEstimator",
    "SuggestionGenerator",
    "SuggestionTemplateError",
    "SUGGESTION_TEMPLATES",
]
