"""expbackoff exception hierarchy."""

from typing import Any


class BackoffError(Exception):
    """Base exception for all expbackoff errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidArgumentError(BackoffError, ValueError):
    """A backoff parameter violates its constraint."""

    def __init__(self, parameter: str, value: Any, expected: str) -> None:
        super().__init__(f"{parameter}: {value} (expected: {expected})")
        self.parameter = parameter
        self.value = value
        self.expected = expected


class ConfigurationError(BackoffError):
    """Error in expbackoff configuration."""

    def __init__(
        self, message: str, config_path: str | None = None, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, details)
        self.config_path = config_path
