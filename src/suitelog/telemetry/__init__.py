# src/suitelog/telemetry/__init__.py

"""
Internal diagnostics logging for suitelog (structlog on top of stdlib logging).
"""

from suitelog.telemetry.logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
