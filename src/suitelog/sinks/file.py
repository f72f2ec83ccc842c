#
# src/suitelog/sinks/file.py
#
"""
File-backed log sink.
"""
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

import structlog

from suitelog.exceptions import SinkClosedError, SinkError

log = structlog.get_logger("sinks.file")


class FileSink:
    """
    Writes newline-terminated messages to a file.

    The file (and any missing parent directories) is created on first use,
    either an explicit ``open()`` or the first ``write()``. With
    ``append=False`` an existing file is truncated when it is opened.
    """

    def __init__(self, path: Path, append: bool = False, timestamps: bool = False):
        self.path = Path(path)
        self.append = append
        self.timestamps = timestamps
        self._stream: TextIO | None = None
        self._closed = False
        self._lock = threading.Lock()
        self._log = log.bind(path=str(self.path), append=append)

    @property
    def name(self) -> str:
        return f"file:{self.path}"

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self) -> None:
        """Creates parent directories and opens the file handle."""
        with self._lock:
            self._open_locked()

    def _open_locked(self) -> None:
        if self._closed:
            raise SinkClosedError("Cannot reopen a closed sink", sink=self.name)
        if self._stream is not None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = self.path.open("a" if self.append else "w", encoding="utf-8")
        except OSError as e:
            self._log.error("Failed to open log file", error=str(e))
            raise SinkError(f"Could not open log file '{self.path}'", sink=self.name, details=e) from e
        self._log.debug("Log file opened")

    def write(self, message: str) -> None:
        with self._lock:
            if self._closed:
                raise SinkClosedError("Write after close", sink=self.name)
            self._open_locked()
            if self.timestamps:
                message = f"{datetime.now(UTC).isoformat()} - {message}"
            try:
                self._stream.write(message + "\n")
                self._stream.flush()
            except (OSError, ValueError) as e:
                raise SinkError("Write failed", sink=self.name, details=e) from e

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            stream, self._stream = self._stream, None
        if stream is not None:
            try:
                stream.close()
            except OSError as e:
                self._log.warning("Error closing log file", error=str(e))
        self._log.debug("Log file sink closed")

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("open" if self._stream else "pending")
        return f"FileSink(path={str(self.path)!r}, append={self.append}, state={state})"


# 🔼⚙️
