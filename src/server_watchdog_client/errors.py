"""Exceptions raised by the Server Watchdog client."""


class WatchdogClientError(Exception):
    """Base class for all client errors."""


class ConfigurationError(WatchdogClientError, ValueError):
    """Raised when the client options are malformed."""


class InvalidArgument(WatchdogClientError, ValueError):
    """Raised when a call argument is malformed, before any request is sent."""


class RequestError(WatchdogClientError):
    """The server answered with a status other than 200."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RequestError(message={self.message!r}, status_code={self.status_code})"
