"""MongoDB report store: implements the ReportStore port."""

from __future__ import annotations

import logging
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from repolens.domain.entities import AnalysisSummary, Report, ReviewMode
from repolens.domain.exceptions import PersistenceError, ReportNotFoundError

logger = logging.getLogger(__name__)

_COLLECTION = "reports"


def _to_document(report: Report) -> dict[str, Any]:
    return {
        "report_id": report.report_id,
        "repo": report.repo,
        "mode": report.mode.value,
        "summary": report.summary.to_dict(),
        "ai_review": report.ai_review,
        "created_at": report.created_at,
    }


def _from_document(doc: dict[str, Any]) -> Report:
    return Report(
        report_id=doc["report_id"],
        repo=doc["repo"],
        mode=ReviewMode(doc.get("mode", ReviewMode.DEV.value)),
        summary=AnalysisSummary.from_dict(doc["summary"]),
        ai_review=doc.get("ai_review", ""),
        created_at=doc["created_at"],
    )


class MongoReportStore:
    """Write-once report log in a single Mongo collection.

    *collection* is any object with pymongo's async ``create_index`` /
    ``insert_one`` / ``find_one`` methods.
    """

    def __init__(self, collection: Any, client: AsyncMongoClient | None = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def from_uri(cls, uri: str, database: str) -> MongoReportStore:
        """Build a store from a connection string (connects lazily)."""
        client: AsyncMongoClient = AsyncMongoClient(
            uri, tz_aware=True, serverSelectionTimeoutMS=5000
        )
        return cls(client[database][_COLLECTION], client=client)

    async def ensure_indexes(self) -> None:
        try:
            await self._collection.create_index("report_id", unique=True)
        except PyMongoError as exc:
            raise PersistenceError(f"Could not create report index: {exc}") from exc

    async def save(self, report: Report) -> None:
        try:
            await self._collection.insert_one(_to_document(report))
        except PyMongoError as exc:
            raise PersistenceError(f"Could not save report {report.report_id}: {exc}") from exc

    async def get(self, report_id: str) -> Report:
        try:
            doc = await self._collection.find_one({"report_id": report_id}, {"_id": 0})
        except PyMongoError as exc:
            raise PersistenceError(f"Could not read report {report_id}: {exc}") from exc

        if doc is None:
            raise ReportNotFoundError(f"Report '{report_id}' not found.")
        return _from_document(doc)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
