# src/suitelog/router.py
"""
Fans a logical log message out to every sink active for a logging mode.
"""
from collections.abc import Iterable

import structlog

from suitelog.config.models import LoggingMode
from suitelog.exceptions import ConfigurationError, SinkError
from suitelog.sinks.protocols import LogSink, SinkChannel, SinkFactory
from suitelog.telemetry import StructLogger

log: StructLogger = structlog.get_logger("router")

CHANNEL_ORDER = {channel: index for index, channel in enumerate(SinkChannel)}


def channels_for_mode(mode: LoggingMode) -> set[SinkChannel]:
    """Channels whose sinks a router with this mode constructs."""
    channels: set[SinkChannel] = set()
    if mode.uses_local:
        channels.update((SinkChannel.LOCAL, SinkChannel.FAILURES))
    if mode.uses_precommit:
        channels.add(SinkChannel.PRECOMMIT)
    return channels


class LogRouter:
    """
    Delivers messages to the sinks implied by ``mode``.

    Sinks are created from ``factories`` when the router is built, keeping
    only the channels the mode uses, and are always written in channel order
    (local before pre-commit). A failing sink is reported on the structlog
    side channel and never prevents delivery to the remaining sinks.
    """

    def __init__(self, mode: LoggingMode | str, factories: Iterable[SinkFactory] = ()):
        self.mode = LoggingMode(mode)
        self._log = log.bind(mode=self.mode.value)
        active = channels_for_mode(self.mode)
        selected = sorted(
            (f for f in factories if f.channel in active),
            key=lambda f: CHANNEL_ORDER[f.channel],
        )

        self._sinks: list[tuple[SinkChannel, LogSink]] = []
        for factory in selected:
            try:
                sink = factory.create()
            except Exception as e:
                self._log.error(
                    "Failed to create sink, closing sinks already created",
                    channel=factory.channel.value,
                    error=str(e),
                )
                self.close()
                if isinstance(e, ConfigurationError):
                    raise
                raise ConfigurationError(
                    f"Could not create {factory.channel.value} sink: {e}", details=e
                ) from e
            self._sinks.append((factory.channel, sink))

        self._log.debug("Router initialized", sinks=[s.name for _, s in self._sinks])

    @property
    def sinks(self) -> tuple[LogSink, ...]:
        return tuple(sink for _, sink in self._sinks)

    def sinks_for(self, *channels: SinkChannel) -> tuple[LogSink, ...]:
        return tuple(sink for channel, sink in self._sinks if channel in channels)

    @property
    def open_sinks(self) -> int:
        return sum(1 for sink in self.sinks if not sink.closed)

    def _deliver(self, message: str, channels: tuple[SinkChannel, ...]) -> int:
        delivered = 0
        for sink in self.sinks_for(*channels):
            try:
                sink.write(message)
                delivered += 1
            except SinkError as e:
                self._log.warning("Sink write failed", sink=sink.name, error=str(e))
            except Exception as e:
                self._log.warning(
                    "Sink write failed",
                    sink=sink.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
        return delivered

    def log(self, message: str) -> int:
        """Writes ``message`` to every local and pre-commit sink. Returns the delivery count."""
        return self._deliver(message, (SinkChannel.LOCAL, SinkChannel.PRECOMMIT))

    def log_failure_summary(self, message: str) -> int:
        """Appends ``message`` to the cumulative failure log, if this mode keeps one."""
        return self._deliver(message, (SinkChannel.FAILURES,))

    def debug(self, message: str) -> int:
        self._log.debug("Debug message routed", length=len(message))
        return self._deliver(f"[DEBUG] {message}", (SinkChannel.LOCAL,))

    def close(self) -> None:
        """Closes every sink. Safe to call more than once."""
        for sink in self.sinks:
            try:
                sink.close()
            except Exception as e:
                self._log.warning("Error closing sink", sink=sink.name, error=str(e))

    def __repr__(self) -> str:
        return f"LogRouter(mode={self.mode.value!r}, sinks={[s.name for s in self.sinks]!r})"


# 🔼⚙️
