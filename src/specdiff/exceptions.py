"""Custom exceptions for SpecDiff."""


class SpecDiffError(Exception):
    """Base exception for SpecDiff errors."""


class InvalidComparisonArgument(SpecDiffError, ValueError):
    """Raised when a comparator is handed an absent node.

    This signals a bug in the caller, never a difference between documents.
    """

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' must not be None")
        self.argument = argument


class ComparisonLimitExceeded(SpecDiffError):
    """Raised when a comparison run exceeds its node or depth budget."""

    def __init__(self, limit: str, value: int, path: str):
        super().__init__(f"Comparison exceeded {limit} ({value}) at path: {path}")
        self.limit = limit
        self.value = value
        self.path = path


class SpecLoadError(SpecDiffError):
    """Raised when a specification cannot be read from its location."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"Could not read {location}: {reason}")
        self.location = location
        self.reason = reason


class SpecParseError(SpecDiffError, ValueError):
    """Raised when specification text is not a usable OpenAPI 3.x document."""
