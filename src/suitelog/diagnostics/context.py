#
# src/suitelog/diagnostics/context.py
#
"""
Renders a numbered excerpt of a source file around a failing line.
"""
from pathlib import Path

import structlog

log = structlog.get_logger("diagnostics.context")

LINE_NUMBER_WIDTH = 6
SEPARATOR = " | "
MARKER = ">"
GUTTER_WIDTH = LINE_NUMBER_WIDTH + len(SEPARATOR)


def render_caret(column: int) -> str:
    """Caret line pointing at a 1-based column of the marked source line."""
    return " " * (GUTTER_WIDTH + column - 1) + "^"


def extract_code_context(
    file_path: str | Path,
    line_number: int,
    context_lines: int = 2,
    column: int | None = None,
    base_dir: Path | None = None,
) -> str:
    """
    Returns up to ``context_lines`` lines either side of ``line_number``.

    Each line is rendered as a 6-wide right-aligned line number, ``" | "`` and
    the source text. The requested line has its leading character replaced by
    ``>``. The file is re-read on every call.

    Never raises: a missing file, an out-of-range line number or a read error
    produce a descriptive message instead of an excerpt.

    Args:
        file_path: Path to the source file, relative to ``base_dir``.
        line_number: 1-based line to mark.
        context_lines: Number of lines shown before and after the marked line.
        column: Optional 1-based column; adds a caret line under the marked line.
            The caret row is extra and does not count towards the
            ``min(context_lines * 2 + 1, available)`` source rows.
        base_dir: Directory relative paths are resolved against (defaults to
            the process working directory).
    """
    try:
        root = Path(base_dir) if base_dir is not None else Path.cwd()
        absolute_path = (root / file_path).resolve()
        if not absolute_path.is_file():
            return f"File not found: {absolute_path}"

        lines = absolute_path.read_text(encoding="utf-8", errors="replace").split("\n")

        if line_number < 1 or line_number > len(lines):
            return f"Invalid line number: {line_number}"

        start_line = max(1, line_number - context_lines)
        end_line = min(len(lines), line_number + context_lines)

        rendered = []
        for number in range(start_line, end_line + 1):
            row = f"{number:>{LINE_NUMBER_WIDTH}}{SEPARATOR}{lines[number - 1]}"
            if number == line_number:
                row = MARKER + row[1:]
            rendered.append(row)
            if number == line_number and column is not None and column > 0:
                rendered.append(render_caret(column))

        return "\n".join(rendered)
    except (OSError, ValueError, TypeError) as e:
        log.debug("Failed to extract code context", file=str(file_path), error=str(e))
        return f"Error reading file: {e}"


# 🔼⚙️
