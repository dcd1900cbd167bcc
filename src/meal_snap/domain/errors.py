"""Error taxonomy for meal analysis."""


class MealSnapError(Exception):
    """Base error carrying a user-facing message and a suggested HTTP status."""

    http_status = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, str]:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(MealSnapError):
    """User input contains nothing that can be turned into a record."""

    http_status = 400


class EmptyInputError(ValidationError):
    """No food item with a non-blank name was supplied."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__("Please add at least one food item", details)


class AnalysisError(MealSnapError):
    """The vision collaborator failed or returned no usable data."""

    def __init__(
        self,
        reason: str,
        message: str = "Failed to analyze food image",
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.reason = reason


class MalformedResponseError(AnalysisError):
    """The vision payload does not match the expected structure."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__("malformed", details=details)


class EmptyAnalysisError(AnalysisError):
    """The vision payload is well-formed but identifies no food."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__("empty", details=details)


class ConfigurationError(MealSnapError):
    """Credentials for the vision collaborator are missing."""
