"""File sampling: decide which tree entries get their content inspected."""

from __future__ import annotations

from typing import Sequence

from repolens.domain.entities import TreeEntry

SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".js", ".ts", ".jsx", ".tsx",
    ".py",
    ".go",
    ".java",
    ".c", ".cpp",
)

DEFAULT_SAMPLE_SIZE = 15


def is_source_file(entry: TreeEntry) -> bool:
    """Return *True* for blobs with one of ``SOURCE_EXTENSIONS``."""
    if entry.type != "blob":
        return False
    return entry.path.lower().endswith(SOURCE_EXTENSIONS)


def sample_source_files(
    entries: Sequence[TreeEntry],
    limit: int = DEFAULT_SAMPLE_SIZE,
) -> list[TreeEntry]:
    """Return the first *limit* source blobs, in tree order.

    There is no ranking: anything past the cap is never inspected, so large
    repositories are judged on an arbitrary prefix of their tree.
    """
    if limit <= 0:
        return []
    sample: list[TreeEntry] = []
    for entry in entries:
        if not is_source_file(entry):
            continue
        sample.append(entry)
        if len(sample) >= limit:
            break
    return sample
