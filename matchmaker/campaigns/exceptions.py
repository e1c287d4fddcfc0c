"""Custom exceptions for campaign planning helpers."""

from matchmaker.domain.exceptions import MatchmakerError


class SuggestionTemplateError(MatchmakerError):
    """A content suggestion template failed to render."""

    pass
