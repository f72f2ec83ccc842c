#
# config/__init__.py
#
"""
Configuration handling sub-package for suitelog.

Exports the loading function and core configuration models.
"""

from .loader import load_config
from .models import GlobalConfig, LoggingConfig, LoggingMode, SuitelogConfig

__all__ = [
    "GlobalConfig",
    "LoggingConfig",
    "LoggingMode",
    "SuitelogConfig",
    "load_config",
]

# 🔼⚙️
