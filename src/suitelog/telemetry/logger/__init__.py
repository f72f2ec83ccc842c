# src/suitelog/telemetry/logger/__init__.py

from suitelog.telemetry.logger.base import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
