"""
Server Watchdog Client - Notification and process watch client

Sends error/warn/info notifications to a Server Watchdog node and asks it
to alert when a process crashes or exits with a non-zero code.
"""

__version__ = "1.0.0"

from .client import (
    NotificationRequest,
    ProcessUnwatchRequest,
    ProcessWatchRequest,
    Severity,
    WatchdogClient,
    create,
)
from .config import ClientConfig
from .errors import ConfigurationError, InvalidArgument, RequestError, WatchdogClientError
from .process import SelfProcess

__all__ = [
    "WatchdogClient",
    "create",
    "ClientConfig",
    "SelfProcess",
    "Severity",
    "NotificationRequest",
    "ProcessWatchRequest",
    "ProcessUnwatchRequest",
    "WatchdogClientError",
    "ConfigurationError",
    "InvalidArgument",
    "RequestError",
]
