"""Exception hierarchy for sact.

Failures are surfaced to the operator, never swallowed: every exception
carries a readable message and an optional hint on how to recover.
"""


class SactError(Exception):
    """Base exception for all sact errors.

    All domain-specific exceptions inherit from this base class,
    enabling consistent error handling across the application.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class FetchError(SactError):
    """Remote API request failed while listing or reading resources."""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message, suggestion)
        self.status = status


class ValidationError(SactError):
    """Input validation failed (e.g. malformed resource id)."""

    pass


class ConfigError(SactError):
    """Configuration is invalid or missing."""

    pass


class CredentialsError(ConfigError):
    """API credentials could not be found."""

    pass
