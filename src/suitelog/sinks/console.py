#
# src/suitelog/sinks/console.py
#
"""
Console-backed log sink used for pre-commit output.
"""
import sys
import threading
from typing import TextIO

import click

from suitelog.exceptions import SinkClosedError, SinkError

PRECOMMIT_PREFIX = "[Pre-commit] "


class ConsoleSink:
    """Echoes each message to standard output, optionally prefixed."""

    def __init__(self, prefix: str = PRECOMMIT_PREFIX, stream: TextIO | None = None):
        self.prefix = prefix
        self._stream = stream
        self._closed = False
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "console"

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, message: str) -> None:
        with self._lock:
            if self._closed:
                raise SinkClosedError("Write after close", sink=self.name)
            # stdout is looked up on every write.
            try:
                click.echo(f"{self.prefix}{message}", file=self._stream or sys.stdout)
            except (OSError, ValueError) as e:
                raise SinkError("Write failed", sink=self.name, details=e) from e

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def __repr__(self) -> str:
        return f"ConsoleSink(prefix={self.prefix!r}, closed={self._closed})"


# 🔼⚙️
