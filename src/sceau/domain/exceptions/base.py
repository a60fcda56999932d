"""
Base domain exceptions.
"""


class SceauException(Exception):
    """Base exception for all Sceau domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ConfigError(SceauException):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        message = f"Invalid configuration for {setting}: {reason}"
        super().__init__(message, code="CONFIG_ERROR")


class DependencyUnavailableError(SceauException):
    """
    Raised when a delegated external service cannot be reached.

    Retryable: the protocol state is untouched, the caller may try again.
    """

    def __init__(self, service: str, reason: str):
        self.service = service
        message = f"{service} unavailable: {reason}"
        super().__init__(message, code="DEPENDENCY_UNAVAILABLE")
