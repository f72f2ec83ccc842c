#
# src/suitelog/diagnostics/stack.py
#
"""
Best-effort recovery of a line/column position from a stack trace string.
"""
import re
from pathlib import PurePath

from attrs import define

# File "tests/test_cache.py", line 42, in test_get
PYTHON_FRAME = re.compile(r'File "(?P<path>[^"]+)", line (?P<line>\d+)')
# at Object.<anonymous> (src/cache.test.ts:42:17)
LOCATION_FRAME = re.compile(r"(?P<path>[^\s()]+?):(?P<line>\d+):(?P<column>\d+)")


@define(frozen=True, slots=True)
class StackLocation:
    line: int
    column: int | None = None


def _mentions(frame: str, source_file: str | None) -> bool:
    if not source_file:
        return False
    if source_file in frame:
        return True
    return PurePath(source_file).name in frame


def _parse_frame(frame: str) -> StackLocation | None:
    match = LOCATION_FRAME.search(frame)
    if match:
        return StackLocation(line=int(match["line"]), column=int(match["column"]))
    match = PYTHON_FRAME.search(frame)
    if match:
        return StackLocation(line=int(match["line"]))
    return None


def relevant_frames(stack: str | None, source_file: str | None) -> list[str]:
    """Stack lines that mention ``source_file``, in their original order."""
    if not stack:
        return []
    return [line for line in stack.splitlines() if _mentions(line, source_file)]


def parse_stack_location(stack: str | None, source_file: str | None = None) -> StackLocation | None:
    """
    Finds the position of the failure inside ``source_file``.

    Python tracebacks list the innermost frame last, V8-style stacks list it
    first; the innermost matching frame wins in both cases. When no frame
    mentions ``source_file`` the innermost parseable frame is used. Returns
    None when nothing can be parsed.
    """
    if not stack:
        return None

    frames = stack.splitlines()
    python_style = any(PYTHON_FRAME.search(f) for f in frames)
    ordered = list(reversed(frames)) if python_style else frames

    fallback = None
    for frame in ordered:
        location = _parse_frame(frame)
        if location is None:
            continue
        if _mentions(frame, source_file):
            return location
        if fallback is None:
            fallback = location
    return fallback


# 🔼⚙️
