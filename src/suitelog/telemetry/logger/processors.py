# src/suitelog/telemetry/logger/processors.py

"""
Custom structlog processors.
"""

from typing import Any

LEVEL_EMOJIS = {
    "debug": "🐛",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
    "critical": "💥",
}


def add_emoji_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Prefixes the event with an emoji for its level, or an explicit ``emoji`` key."""
    emoji = event_dict.pop("emoji", None) or LEVEL_EMOJIS.get(method_name)
    event = event_dict.get("event")
    if emoji and isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Drops keys whose value is None."""
    for key in [k for k, v in event_dict.items() if v is None and k != "event"]:
        del event_dict[key]
    return event_dict

# 🔼⚙️
