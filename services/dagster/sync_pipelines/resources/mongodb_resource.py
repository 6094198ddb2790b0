"""MongoDB Resource - Sync run ledger operations."""

from __future__ import annotations

from datetime import datetime, timezone
from functools import cached_property
from typing import Any, ClassVar, Dict

from dagster import ConfigurableResource
from pydantic import Field
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from netsync.models import (
    SyncActionRecord,
    SyncReport,
    SyncRun,
    SyncRunStatus,
)

__all__ = ["MongoDBResource"]


class MongoDBResource(ConfigurableResource):
    """
    Dagster resource for the MongoDB sync ledger.

    Records one document per sync run and one per source network processed,
    so that unresolved networks can be found and retried by later runs.
    """

    connection_string: str = Field(..., description="MongoDB connection URI")
    database: str = Field("netsync", description="MongoDB database name")

    SYNC_RUNS: ClassVar[str] = "sync_runs"
    SYNC_ACTIONS: ClassVar[str] = "sync_actions"

    @cached_property
    def _client(self) -> MongoClient:
        return MongoClient(self.connection_string)

    def _get_db(self) -> Database:
        return self._client[self.database]

    def _get_collection(self, name: str) -> Collection:
        return self._get_db()[name]

    @staticmethod
    def _strip_object_id(doc: Dict) -> Dict:
        stripped = dict(doc)
        stripped.pop("_id", None)
        return stripped

    # ------------------------------------------------------------------
    # Run operations
    # ------------------------------------------------------------------

    def insert_sync_run(self, dagster_run_id: str, plan_name: str) -> str:
        """
        Create the run document (upsert by dagster_run_id).

        Returns the ObjectId of the run document as a string.
        Upsert ensures idempotency if called multiple times for the same run.
        """
        collection = self._get_collection(self.SYNC_RUNS)
        run = SyncRun(
            dagster_run_id=dagster_run_id,
            plan_name=plan_name,
            status=SyncRunStatus.RUNNING,
        )
        result = collection.update_one(
            {"dagster_run_id": dagster_run_id},
            {"$setOnInsert": run.model_dump(mode="python")},
            upsert=True,
        )
        if result.upserted_id:
            return str(result.upserted_id)
        # Document existed, return its ObjectId
        existing = collection.find_one(
            {"dagster_run_id": dagster_run_id}, projection={"_id": 1}
        )
        return str(existing["_id"]) if existing else ""

    def complete_sync_run(self, dagster_run_id: str, report: SyncReport) -> None:
        """
        Mark a run successful and store its summary.

        A run completes successfully even when some networks failed; their
        errors are stored on the run document.
        """
        collection = self._get_collection(self.SYNC_RUNS)
        update_doc: Dict[str, Any] = {
            "status": SyncRunStatus.SUCCESS.value,
            "mode": report.mode.value,
            "counts": report.counts(),
            "quarantined_ids": [q.network_id for q in report.quarantined],
            "errors": list(report.errors),
            "completed_at": report.completed_at or datetime.now(timezone.utc),
        }
        collection.update_one({"dagster_run_id": dagster_run_id}, {"$set": update_doc})

    def fail_sync_run(self, dagster_run_id: str, error_message: str) -> None:
        """
        Mark a run as failed (the run could not reconcile anything).
        """
        collection = self._get_collection(self.SYNC_RUNS)
        collection.update_one(
            {"dagster_run_id": dagster_run_id},
            {
                "$set": {
                    "status": SyncRunStatus.FAILURE.value,
                    "completed_at": datetime.now(timezone.utc),
                },
                "$push": {"errors": error_message},
            },
        )

    def get_sync_run(self, dagster_run_id: str) -> SyncRun | None:
        """
        Load a run document by dagster_run_id.
        """
        collection = self._get_collection(self.SYNC_RUNS)
        document = collection.find_one({"dagster_run_id": dagster_run_id})
        if not document:
            return None
        return SyncRun(**self._strip_object_id(document))

    # ------------------------------------------------------------------
    # Action operations
    # ------------------------------------------------------------------

    def insert_action_records(self, records: list[SyncActionRecord]) -> list[str]:
        """
        Persist the per-network entries of a run.

        Returns the inserted ObjectIds as strings (empty when there is nothing to insert).
        """
        if not records:
            return []
        collection = self._get_collection(self.SYNC_ACTIONS)
        result = collection.insert_many([record.model_dump(mode="python") for record in records])
        return [str(oid) for oid in result.inserted_ids]

    def get_action_records(self, dagster_run_id: str) -> list[SyncActionRecord]:
        """
        Load every action entry of a run, in insertion order.
        """
        collection = self._get_collection(self.SYNC_ACTIONS)
        cursor = collection.find({"dagster_run_id": dagster_run_id}).sort("_id", 1)
        return [SyncActionRecord(**self._strip_object_id(doc)) for doc in cursor]

    def get_unresolved_source_ids(self, dagster_run_id: str) -> list[str]:
        """
        Return source ids whose action failed in a run (candidates for a retry run).
        """
        collection = self._get_collection(self.SYNC_ACTIONS)
        cursor = collection.find(
            {"dagster_run_id": dagster_run_id, "succeeded": False},
            projection={"source_id": 1},
        ).sort("_id", 1)
        return [doc["source_id"] for doc in cursor]
