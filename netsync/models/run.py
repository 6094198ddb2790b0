# =============================================================================
# Sync Run Ledger Models
# =============================================================================
# Defines the MongoDB documents that record synchronization runs:
# - SyncRun: One document per Dagster run of the sync job
# - SyncActionRecord: One document per source network processed
# =============================================================================

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from .report import ActionResult, SyncAction, SyncMode

__all__ = ["SyncRun", "SyncRunStatus", "SyncActionRecord"]


class SyncRunStatus(str, Enum):
    """Status of a sync run in the MongoDB ledger."""

    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"


class SyncRun(BaseModel):
    """
    Run document model for MongoDB tracking.

    Created when the sync job starts (via init_sync_run_op) and completed once
    the report has been recorded (via record_sync_report_op). A run whose
    source networks partly failed still ends in SUCCESS; per-network failures
    live in ``errors`` and in the run's action records.

    Attributes:
        dagster_run_id: Dagster's internal run ID (unique index)
        plan_name: Plan file the run executed
        mode: Operating mode, once known
        status: Current run status
        counts: Number of decisions per action
        quarantined_ids: Networks excluded because their lineage could not be read
        errors: Error messages accumulated during the run
        started_at: Timestamp when run started
        completed_at: Timestamp when run completed (if finished)
    """

    dagster_run_id: str = Field(..., description="Dagster run ID (unique)")
    plan_name: str = Field(..., description="Plan file executed by the run")
    mode: Optional[SyncMode] = Field(None, description="Operating mode")
    status: SyncRunStatus = Field(..., description="Current run status")
    counts: dict[str, int] = Field(default_factory=dict)
    quarantined_ids: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Run start timestamp",
    )
    completed_at: Optional[datetime] = Field(
        None, description="Run completion timestamp"
    )


class SyncActionRecord(BaseModel):
    """
    Ledger entry for one source network processed in a run.

    Attributes:
        dagster_run_id: Run that produced the entry
        source_id: Source network id
        action: Action chosen
        target_id: Target network acted upon or created
        reason: Decision explanation
        needs_update: Whether the decision flagged a stale copy (a Create that
            duplicates a stale copy, or a refresh of one)
        succeeded: Whether every attempted step succeeded
        steps: Step outcomes as plain dicts
        timestamp: When the entry was recorded (UTC)
    """

    dagster_run_id: str
    source_id: str
    action: SyncAction
    target_id: Optional[str] = None
    reason: str = ""
    needs_update: bool = False
    succeeded: bool = True
    steps: list[dict[str, Any]] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(cls, dagster_run_id: str, result: ActionResult) -> "SyncActionRecord":
        """Build a ledger entry from an executed action."""
        return cls(
            dagster_run_id=dagster_run_id,
            source_id=result.decision.source_id,
            action=result.decision.action,
            target_id=result.result_target_id or result.decision.target_id,
            reason=result.decision.reason,
            needs_update=result.decision.needs_update,
            succeeded=result.succeeded,
            steps=[step.model_dump(mode="json") for step in result.steps],
        )
