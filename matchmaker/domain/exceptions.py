"""Custom exceptions for discovery and estimation requests."""

from typing import List, Optional


class MatchmakerError(Exception):
    """Base exception for all request-level errors.

    Catching this exception will catch any error that should be reported back
    to the caller of a discovery, estimation or suggestion request.
    """

    pass


class InvalidFilterError(MatchmakerError):
    """A FilterSpec is malformed (e.g. a range with min > max).

    Raised before any candidate is scored. Stores every problem found so the
    caller can report them together.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        """Initialize InvalidFilterError.

        Args:
            message: Primary error message
            errors: List of specific filter problems
        """
        self.message = message
        self.errors = errors or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the message with all filter problems."""
        if not self.errors:
            return self.message
        return f"{self.message}: " + "; ".join(self.errors)


class InvalidInputError(MatchmakerError):
    """Negative counts, percentages or out-of-range pagination parameters."""

    pass
