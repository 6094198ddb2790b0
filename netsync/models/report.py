# =============================================================================
# Sync Report Models
# =============================================================================
# Defines the outputs of a synchronization run:
# - SyncAction / SyncDecision: What the decision engine chose per source
# - StepStatus / StepOutcome: Per-step result recorded by the executor
# - ActionResult: A decision together with its execution steps
# - SyncReport: Everything that happened during one run
# =============================================================================

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

__all__ = [
    "SyncMode",
    "SyncAction",
    "SyncDecision",
    "StepName",
    "StepStatus",
    "StepOutcome",
    "ActionResult",
    "QuarantinedNetwork",
    "SyncReport",
]


class SyncMode(str, Enum):
    """Operating mode selected once per run."""

    CREATE_ONLY = "create_only"
    UPDATE = "update"


class SyncAction(str, Enum):
    """Corrective action chosen for one source network."""

    CREATE = "create"
    UPDATE = "update"
    UPDATE_READ_ONLY = "update_read_only"
    SKIP = "skip"


class SyncDecision(BaseModel):
    """
    Action chosen for one source network.

    Attributes:
        source_id: Source network external id
        action: Chosen action
        target_id: Target network the action applies to (update/skip on a copy)
        reason: Human-readable explanation of the decision
        needs_update: True when a stale direct copy was found in Create-only mode
    """

    source_id: str = Field(..., description="Source network id")
    action: SyncAction = Field(..., description="Chosen action")
    target_id: Optional[str] = Field(None, description="Target network id, if any")
    reason: str = Field("", description="Why this action was chosen")
    needs_update: bool = Field(False, description="Stale direct copy found (Create-only mode)")


class StepName(str, Enum):
    """Executor steps, in the order they may run."""

    FETCH_CONTENT = "fetch_content"
    CLEAR_READ_ONLY = "clear_read_only"
    CREATE = "create"
    UPDATE = "update"
    SET_PROVENANCE = "set_provenance"
    RESTORE_READ_ONLY = "restore_read_only"


class StepStatus(str, Enum):
    """Outcome of a single executor step."""

    NOT_ATTEMPTED = "not_attempted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class StepOutcome(BaseModel):
    """Recorded outcome of one executor step."""

    step: StepName
    status: StepStatus = StepStatus.NOT_ATTEMPTED
    error: Optional[str] = None


class ActionResult(BaseModel):
    """
    A decision and what happened when it was carried out.

    Attributes:
        decision: The decision that was executed
        steps: Ordered step outcomes (empty for SKIP)
        result_target_id: Target network written to, if any
    """

    decision: SyncDecision
    steps: list[StepOutcome] = Field(default_factory=list)
    result_target_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True iff no attempted step failed."""
        return all(step.status != StepStatus.FAILED for step in self.steps)

    @property
    def errors(self) -> list[str]:
        """Error messages of failed steps, prefixed with the step name."""
        return [
            f"{step.step.value}: {step.error}"
            for step in self.steps
            if step.status == StepStatus.FAILED
        ]

    def step(self, name: StepName) -> StepOutcome | None:
        """Return the outcome recorded for ``name``, if that step is part of the action."""
        for outcome in self.steps:
            if outcome.step == name:
                return outcome
        return None


class QuarantinedNetwork(BaseModel):
    """A network excluded from the run because its lineage could not be read."""

    network_id: str
    role: str = Field(..., description="'source' or 'target'")
    reason: str


class SyncReport(BaseModel):
    """
    Everything that happened during one synchronization run.

    Attributes:
        mode: Operating mode of the run
        results: One ActionResult per processed source network
        quarantined: Networks excluded because their lineage could not be read
        errors: Run-level error messages (per-record failures included)
        started_at: Run start timestamp
        completed_at: Run completion timestamp
    """

    mode: SyncMode
    results: list[ActionResult] = Field(default_factory=list)
    quarantined: list[QuarantinedNetwork] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    def counts(self) -> dict[str, int]:
        """Number of decisions per action, including zero counts."""
        counts = {action.value: 0 for action in SyncAction}
        for result in self.results:
            counts[result.decision.action.value] += 1
        return counts

    @property
    def failed(self) -> list[ActionResult]:
        """Results with at least one failed step."""
        return [result for result in self.results if not result.succeeded]

    def decision_for(self, source_id: str) -> SyncDecision | None:
        """Return the decision made for ``source_id``, if it was processed."""
        for result in self.results:
            if result.decision.source_id == source_id:
                return result.decision
        return None
