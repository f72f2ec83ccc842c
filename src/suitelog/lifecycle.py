# src/suitelog/lifecycle.py
"""
Owns log sink creation and teardown for a test-suite run.
"""
import atexit
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum, auto
from typing import TextIO

import structlog
from attrs import field, mutable

from suitelog.config.models import LoggingConfig
from suitelog.exceptions import ConfigurationError, LifecycleError, SinkError
from suitelog.router import LogRouter
from suitelog.sinks import ConsoleSink, FileSink, LogSink, SinkChannel, SinkFactory
from suitelog.telemetry import StructLogger

log: StructLogger = structlog.get_logger("lifecycle")


class LifecycleState(Enum):
    UNINITIALIZED = auto()
    OPEN = auto()
    CLOSED = auto()


class HandleState(Enum):
    OPEN = auto()
    CLOSED = auto()


@mutable(slots=True)
class RouterHandle:
    """
    A router together with the sinks it owns, as returned by ``open()``.

    The OPEN -> CLOSED transition is one-way.
    """

    config: LoggingConfig = field()
    router: LogRouter = field()
    target: str = field()
    state: HandleState = field(default=HandleState.OPEN)

    @property
    def sinks(self) -> tuple[LogSink, ...]:
        return self.router.sinks

    @property
    def closed(self) -> bool:
        return self.state is HandleState.CLOSED

    def close(self) -> None:
        if self.state is HandleState.CLOSED:
            return
        self.state = HandleState.CLOSED
        self.router.close()


def _file_factory(channel: SinkChannel, sink: FileSink) -> SinkFactory:
    def create() -> LogSink:
        try:
            sink.open()
        except SinkError as e:
            raise ConfigurationError(
                f"Cannot provision log file '{sink.path}': {e.details or e}", details=e
            ) from e
        return sink

    return SinkFactory(channel=channel, create=create)


class LifecycleManager:
    """
    Opens routers for suites and guarantees their sinks are closed.

    Each open handle is keyed by its suite log path. Opening a target that
    is already open raises LifecycleError rather than creating a second
    file handle for it.
    """

    def __init__(self, console_stream: TextIO | None = None):
        self._console_stream = console_stream
        self._handles: dict[str, RouterHandle] = {}
        self._state = LifecycleState.UNINITIALIZED
        self._restore_hooks: Callable[[], None] | None = None

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def handles(self) -> tuple[RouterHandle, ...]:
        return tuple(self._handles.values())

    def _factories(self, config: LoggingConfig) -> list[SinkFactory]:
        factories: list[SinkFactory] = []
        if config.mode.uses_local:
            factories.append(
                _file_factory(
                    SinkChannel.LOCAL,
                    FileSink(config.suite_log_path, append=False, timestamps=config.timestamps),
                )
            )
            factories.append(
                _file_factory(
                    SinkChannel.FAILURES,
                    FileSink(config.failure_log_path, append=not config.truncate_failure_log),
                )
            )
        if config.mode.uses_precommit and config.hook_active:
            factories.append(
                SinkFactory(
                    channel=SinkChannel.PRECOMMIT,
                    create=lambda: ConsoleSink(stream=self._console_stream),
                )
            )
        return factories

    def open(self, config: LoggingConfig) -> RouterHandle:
        """
        Provisions directories, opens every sink the mode implies and returns
        a handle wrapping the ready router.

        Raises:
            LifecycleError: the same target already has an open handle.
            ConfigurationError: a sink could not be opened. Sinks opened
                before the failure are closed again.
        """
        target = str(config.suite_log_path.resolve())
        open_log = log.bind(target=target, mode=config.mode.value)

        existing = self._handles.get(target)
        if existing is not None and not existing.closed:
            open_log.error("Log target is already open")
            raise LifecycleError(f"Log target '{target}' is already open; close it before reopening")

        router = LogRouter(config.mode, self._factories(config))
        handle = RouterHandle(config=config, router=router, target=target)
        self._handles[target] = handle
        self._state = LifecycleState.OPEN
        open_log.info("Logging session opened", sinks=[s.name for s in handle.sinks])
        return handle

    def close(self, handle: RouterHandle | None = None) -> None:
        """
        Closes ``handle`` (or every open handle when omitted).

        A no-op before anything was opened, and for handles already closed.
        Does no unbounded work, so it is safe from exit and excepthook paths.
        """
        if self._state is LifecycleState.UNINITIALIZED:
            return
        targets = [handle] if handle is not None else list(self._handles.values())
        for item in targets:
            item.close()
            if self._handles.get(item.target) is item:
                del self._handles[item.target]
            log.debug("Logging session closed", target=item.target)
        if not self._handles:
            self._state = LifecycleState.CLOSED

    def close_all(self) -> None:
        self.close()

    @contextmanager
    def session(self, config: LoggingConfig) -> Iterator[RouterHandle]:
        """Opens a handle for the duration of a ``with`` block."""
        handle = self.open(config)
        try:
            yield handle
        finally:
            self.close(handle)

    def install_exit_hooks(self) -> Callable[[], None]:
        """
        Closes every handle at interpreter exit and on uncaught exceptions.

        An uncaught exception is first reported to each open router. Returns
        a function that removes the hooks again.
        """
        if self._restore_hooks is not None:
            return self._restore_hooks

        previous_hook = sys.excepthook

        def excepthook(exc_type, exc, tb):
            for handle in self.handles:
                if not handle.closed:
                    handle.router.log(f"Uncaught Exception: {exc_type.__name__}: {exc}")
            self.close_all()
            previous_hook(exc_type, exc, tb)

        sys.excepthook = excepthook
        atexit.register(self.close_all)

        def restore() -> None:
            if sys.excepthook is excepthook:
                sys.excepthook = previous_hook
            atexit.unregister(self.close_all)
            self._restore_hooks = None

        self._restore_hooks = restore
        log.debug("Exit hooks installed")
        return restore


# 🔼⚙️
