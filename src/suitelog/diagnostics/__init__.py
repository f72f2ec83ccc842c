#
# src/suitelog/diagnostics/__init__.py
#
"""
Source-code context and stack-trace helpers used when rendering failures.
"""
from .context import extract_code_context, render_caret
from .stack import StackLocation, parse_stack_location, relevant_frames

__all__ = [
    "StackLocation",
    "extract_code_context",
    "parse_stack_location",
    "relevant_frames",
    "render_caret",
]

# 🔼⚙️
