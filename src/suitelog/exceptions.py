# src/suitelog/exceptions.py

"""
Exception hierarchy for suitelog.
"""


class SuitelogError(Exception):
    """Base class for all suitelog errors."""

    def __init__(self, message: str, details: Exception | None = None):
        self.details = details
        super().__init__(message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ConfigurationError(SuitelogError):
    """Invalid configuration, or a log destination that cannot be provisioned."""

    pass


class ResultFormatError(SuitelogError):
    """A test result record could not be decoded."""

    pass


class LifecycleError(SuitelogError):
    """A router handle was opened or used out of order."""

    pass


class SinkError(SuitelogError):
    """Base class for errors raised by a log sink."""

    def __init__(
        self,
        message: str,
        sink: str | None = None,
        details: Exception | None = None,
    ):
        self.sink = sink
        full_message = f"[Sink] {message}"
        if sink:
            full_message += f" (Sink: '{sink}')"
        super().__init__(full_message, details=details)


class SinkClosedError(SinkError):
    """Raised when a message is written to a sink that was already closed."""

    pass


# 🔼⚙️
