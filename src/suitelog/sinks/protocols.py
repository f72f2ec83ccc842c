#
# src/suitelog/sinks/protocols.py
#
"""
Defines the sink protocol and the factories routers build sinks from.
"""
from collections.abc import Callable
from enum import Enum
from typing import Protocol, runtime_checkable

from attrs import define, field


class SinkChannel(Enum):
    """Role a sink plays for a router. Members are listed in delivery order."""

    LOCAL = "local"
    PRECOMMIT = "precommit"
    FAILURES = "failures"


@runtime_checkable
class LogSink(Protocol):
    """
    Protocol for a single output destination.

    ``write`` raises SinkClosedError after ``close``; ``close`` is idempotent.
    """

    @property
    def name(self) -> str: ...

    @property
    def closed(self) -> bool: ...

    def write(self, message: str) -> None: ...

    def close(self) -> None: ...


@define(frozen=True, slots=True)
class SinkFactory:
    """Creates one sink for a given channel when a router is built."""
    channel: SinkChannel = field()
    create: Callable[[], LogSink] = field()


# 🔼⚙️
