#
# src/suitelog/sinks/__init__.py
#
"""
Log sink sub-package: single writable destinations for report text.
"""
from .console import PRECOMMIT_PREFIX, ConsoleSink
from .file import FileSink
from .protocols import LogSink, SinkChannel, SinkFactory

__all__ = [
    "PRECOMMIT_PREFIX",
    "ConsoleSink",
    "FileSink",
    "LogSink",
    "SinkChannel",
    "SinkFactory",
]

# 🔼⚙️
