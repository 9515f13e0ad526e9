"""Port: report store for write-once persistence of analysis reports."""

from __future__ import annotations

from typing import Protocol

from repolens.domain.entities import Report


class ReportStore(Protocol):
    """Abstract contract for saving and looking up shareable reports."""

    async def ensure_indexes(self) -> None:
        """Create the (advisory) unique index on ``report_id``."""
        ...

    async def save(self, report: Report) -> None:
        """Persist *report*; raises ``PersistenceError`` on failure."""
        ...

    async def get(self, report_id: str) -> Report:
        """Return the report stored under *report_id*.

        Raises ``ReportNotFoundError`` when absent and ``PersistenceError``
        when the store cannot be read.
        """
        ...
