"""Identity of the calling process, used as the default watch target."""

from __future__ import annotations

import sys
from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class SelfProcess:
    """Process id and description substituted when a caller omits them."""

    pid: int
    name: str

    @classmethod
    def current(cls) -> "SelfProcess":
        """Describe the running interpreter process."""
        proc = psutil.Process()
        try:
            name = proc.exe()
        except (psutil.AccessDenied, psutil.ZombieProcess):
            name = ""
        return cls(pid=proc.pid, name=name or sys.executable)
