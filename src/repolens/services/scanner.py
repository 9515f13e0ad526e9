"""Line-level heuristic scanner.

Plain substring checks, nothing more.  The secret hints in particular are a
crude signal: ``token =`` inside a comment or a test fixture counts the same
as a real credential.  Findings are advisory and must not be presented as a
security scan.
"""

from __future__ import annotations

from repolens.domain.entities import FileFindings

LONG_FILE_THRESHOLD = 300

TODO_MARKERS: tuple[str, ...] = ("TODO", "FIXME")
DEBUG_PRINT_MARKERS: tuple[str, ...] = ("console.log",)
# Matched against the lower-cased line.
SECRET_HINT_MARKERS: tuple[str, ...] = ("apikey", "secret", "token =")


def _contains_any(line: str, markers: tuple[str, ...]) -> bool:
    return any(marker in line for marker in markers)


def scan(text: str) -> FileFindings:
    """Count heuristic markers in *text*; each line counts at most once per marker family."""
    lines = text.splitlines()
    todo_count = log_count = secret_hint_count = 0

    for line in lines:
        if _contains_any(line, TODO_MARKERS):
            todo_count += 1
        if _contains_any(line, DEBUG_PRINT_MARKERS):
            log_count += 1
        if _contains_any(line.lower(), SECRET_HINT_MARKERS):
            secret_hint_count += 1

    return FileFindings(
        is_long=len(lines) > LONG_FILE_THRESHOLD,
        todo_count=todo_count,
        log_count=log_count,
        secret_hint_count=secret_hint_count,
    )
