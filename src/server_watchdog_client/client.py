"""HTTP client for the Server Watchdog notification service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .config import ClientConfig
from .errors import InvalidArgument, RequestError
from .process import SelfProcess

logger = logging.getLogger(__name__)

UNSUCCESSFUL_RESPONSE = "Unsuccessful response from node."


class Severity:
    """Importance levels understood by the server."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"

    ALL = (ERROR, WARN, INFO)


@dataclass
class NotificationRequest:
    """Body of a ``notify`` call."""

    message: str
    channel: str
    severity: str

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "channel": self.channel,
            "severity": self.severity,
        }


@dataclass
class ProcessWatchRequest:
    """Body of a ``process/watch`` call."""

    pid: int
    name: str
    channel: str
    severity: str

    def to_dict(self) -> dict:
        return {
            "pid": self.pid,
            "name": self.name,
            "channel": self.channel,
            "severity": self.severity,
        }


@dataclass
class ProcessUnwatchRequest:
    """Body of a ``process/unwatch`` call."""

    pid: int
    channel: str

    def to_dict(self) -> dict:
        return {"pid": self.pid, "channel": self.channel}


class WatchdogClient:
    """Sends notifications and process watch requests to a watchdog server.

    Every public method performs exactly one POST and returns ``None`` on
    success. Argument errors raise :class:`InvalidArgument` before anything is
    sent; non-200 answers raise :class:`RequestError`. Transport failures
    (connection refused, timeouts) propagate as ``requests`` exceptions.

    The client keeps no mutable state beyond the lazily resolved calling
    process descriptor, so one instance may be shared between threads.
    """

    def __init__(self, config: ClientConfig, self_process: Optional[SelfProcess] = None):
        self._config = config
        self._self_process = self_process

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def default_channel(self) -> str:
        """Channel used when a call does not name one."""
        return self._config.default_channel

    def error(self, message: str, channel: Optional[str] = None) -> None:
        """Notify about an error event."""
        self._notify(message, channel, Severity.ERROR)

    def warn(self, message: str, channel: Optional[str] = None) -> None:
        """Notify about a warning event."""
        self._notify(message, channel, Severity.WARN)

    def info(self, message: str, channel: Optional[str] = None) -> None:
        """Send an informational notification."""
        self._notify(message, channel, Severity.INFO)

    def process_watch(
        self,
        pid: Optional[int] = None,
        name: Optional[str] = None,
        severity: Optional[str] = None,
        channel: Optional[str] = None,
    ) -> None:
        """Ask the server to monitor a process.

        The server notifies ``channel`` with ``severity`` if the process
        crashes or exits with a non-zero code. ``pid`` and ``name`` default to
        the calling process; ``severity`` defaults to ``"error"``.
        """
        pid = self._validate_pid(pid)
        if not name:
            name = self._current_process().name
        elif not isinstance(name, str):
            raise InvalidArgument("Invalid process name")
        severity = self._validate_severity(severity)
        channel = self._validate_channel(channel)

        request = ProcessWatchRequest(pid=pid, name=name, channel=channel, severity=severity)
        self.send_request("process/watch", request.to_dict(), no_response=True)

    def process_unwatch(self, pid: Optional[int] = None, channel: Optional[str] = None) -> None:
        """Stop monitoring a process previously passed to :meth:`process_watch`."""
        pid = self._validate_pid(pid)
        channel = self._validate_channel(channel)

        request = ProcessUnwatchRequest(pid=pid, channel=channel)
        self.send_request("process/unwatch", request.to_dict(), no_response=True)

    def send_request(self, path: str, body: dict, no_response: bool = False) -> Any:
        """POST ``body`` as JSON to ``path`` relative to the base URL.

        Returns the decoded JSON answer, or ``None`` when ``no_response`` is
        set.
        """
        url = self._config.base_url + path
        logger.debug(f"POST {url}")

        response = requests.post(
            url,
            json=body,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "X-Api-Key": self._config.api_key,
            },
            timeout=self._config.timeout_seconds,
        )

        if response.status_code != 200:
            try:
                text = response.text
            except (requests.RequestException, UnicodeDecodeError):
                text = None
            if not isinstance(text, str) or not text:
                text = UNSUCCESSFUL_RESPONSE
            raise RequestError(
                f"{text} [Status: {response.status_code}]",
                status_code=response.status_code,
            )

        if no_response:
            return None

        return response.json()

    def _notify(self, message: str, channel: Optional[str], severity: str) -> None:
        if not isinstance(message, str):
            raise InvalidArgument("Invalid message")
        if not message:
            logger.debug(f"Skipping empty {severity} notification")
            return
        channel = self._validate_channel(channel)

        request = NotificationRequest(message=message, channel=channel, severity=severity)
        self.send_request("notify", request.to_dict(), no_response=True)

    def _current_process(self) -> SelfProcess:
        # Resolved on first use; concurrent callers compute the same value
        if self._self_process is None:
            self._self_process = SelfProcess.current()
        return self._self_process

    def _validate_pid(self, pid: Any) -> int:
        if not pid:
            pid = self._current_process().pid
        if not isinstance(pid, int) or isinstance(pid, bool) or pid < 1:
            raise InvalidArgument("Invalid process id")
        return pid

    def _validate_channel(self, channel: Any) -> str:
        if channel and not isinstance(channel, str):
            raise InvalidArgument("Invalid channel")
        return channel or self._config.default_channel

    @staticmethod
    def _validate_severity(severity: Any) -> str:
        if not severity:
            return Severity.ERROR
        if not isinstance(severity, str) or severity not in Severity.ALL:
            raise InvalidArgument("Invalid severity")
        return severity


def create(options: Mapping[str, Any], self_process: Optional[SelfProcess] = None) -> WatchdogClient:
    """Validate ``options`` and build a client bound to them."""
    return WatchdogClient(ClientConfig.from_dict(options), self_process=self_process)
