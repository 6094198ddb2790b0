# =============================================================================
# Sync Executor
# =============================================================================
# Carries out a SyncDecision against the target registry and writes the copy
# provenance of every network it creates or refreshes.
# =============================================================================

"""
Sync execution.

Every registry call is a step with a recorded outcome. A failing step is
logged and recorded, never raised: steps that depend on it are left
``not_attempted`` and the run moves on to the next source network.

Refreshing a read-only copy runs as a fixed sequence::

    clear_read_only -> fetch_content -> update -> set_provenance -> restore_read_only

``restore_read_only`` is attempted whatever happened before it, so a failed
refresh does not leave a protected network writable.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import ValidationError

from netsync.models import (
    ActionResult,
    NetworkSummary,
    StepName,
    StepOutcome,
    StepStatus,
    SyncAction,
    SyncDecision,
)
from netsync.provenance import create_copy_provenance
from netsync.registry import NetworkRegistry, RegistryError

from .context import RunContext

__all__ = ["SyncExecutor"]

logger = logging.getLogger(__name__)

_STEP_ERRORS = (RegistryError, ValidationError)

_PLANS: dict[SyncAction, list[StepName]] = {
    SyncAction.SKIP: [],
    SyncAction.CREATE: [StepName.FETCH_CONTENT, StepName.CREATE, StepName.SET_PROVENANCE],
    SyncAction.UPDATE: [StepName.FETCH_CONTENT, StepName.UPDATE, StepName.SET_PROVENANCE],
    SyncAction.UPDATE_READ_ONLY: [
        StepName.CLEAR_READ_ONLY,
        StepName.FETCH_CONTENT,
        StepName.UPDATE,
        StepName.SET_PROVENANCE,
        StepName.RESTORE_READ_ONLY,
    ],
}


class SyncExecutor:
    """
    Executes decisions against the target registry.

    Args:
        source: Registry the source networks live on
        target: Registry copies are written to
        log: Logger to use (defaults to this module's logger)
        clock: Returns the copy event end time (defaults to current UTC time)
    """

    def __init__(
        self,
        source: NetworkRegistry,
        target: NetworkRegistry,
        log=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.source = source
        self.target = target
        self.log = log or logger
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        decision: SyncDecision,
        source_network: NetworkSummary,
        context: RunContext,
    ) -> ActionResult:
        """
        Carry out ``decision`` for ``source_network``.

        Returns:
            ActionResult with one StepOutcome per planned step
        """
        result = ActionResult(
            decision=decision,
            steps=[StepOutcome(step=name) for name in _PLANS[decision.action]],
        )

        if decision.action == SyncAction.SKIP:
            self.log.info(f"No action for source {source_network.external_id}: {decision.reason}")
        elif decision.action == SyncAction.CREATE:
            self._copy(result, source_network, context, target_id=None)
        elif decision.action == SyncAction.UPDATE:
            self._copy(result, source_network, context, target_id=decision.target_id)
        elif decision.action == SyncAction.UPDATE_READ_ONLY:
            self._update_read_only(result, source_network, context)

        return result

    # ------------------------------------------------------------------
    # Step bookkeeping
    # ------------------------------------------------------------------

    def _run_step(self, result: ActionResult, name: StepName, fn: Callable[[], Any]) -> tuple[bool, Any]:
        outcome = result.step(name)
        try:
            value = fn()
        except _STEP_ERRORS as e:
            outcome.status = StepStatus.FAILED
            outcome.error = str(e)
            self.log.error(
                f"Step '{name.value}' failed for source {result.decision.source_id} "
                f"(target {result.decision.target_id or 'new'}): {e}"
            )
            return False, None
        outcome.status = StepStatus.SUCCEEDED
        return True, value

    def _fetch_content(self, source_id: str) -> dict[str, Any]:
        content = self.source.get_network(source_id)
        if not isinstance(content, dict):
            raise RegistryError(
                f"No network content returned for source {source_id}",
                service=self.source.base_route,
            )
        return content

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _copy(
        self,
        result: ActionResult,
        source_network: NetworkSummary,
        context: RunContext,
        target_id: str | None,
    ) -> None:
        """Create a new copy (target_id None) or overwrite ``target_id``, then write its provenance."""
        source_id = source_network.external_id

        ok, content = self._run_step(result, StepName.FETCH_CONTENT, lambda: self._fetch_content(source_id))
        if not ok:
            return

        if target_id is None:
            ok, copied = self._run_step(result, StepName.CREATE, lambda: self.target.create_network(content))
            if not ok:
                return
            self.log.info(f"Copied {source_id} to {copied.external_id}")
        else:
            content = dict(content)
            content["externalId"] = target_id
            ok, copied = self._run_step(result, StepName.UPDATE, lambda: self.target.update_network(content))
            if not ok:
                return
            self.log.info(f"Updated {copied.external_id} from {source_id}")

        result.result_target_id = copied.external_id

        provenance = create_copy_provenance(
            copied,
            source_network,
            context.provenance_of(source_id),
            source_base_route=self.source.base_route,
            target_base_route=self.target.base_route,
            now=self.clock(),
        )
        ok, _ = self._run_step(
            result,
            StepName.SET_PROVENANCE,
            lambda: self.target.set_provenance(copied.external_id, provenance),
        )
        if ok:
            self.log.info(f"Set provenance for copy {copied.external_id}")

    def _update_read_only(
        self,
        result: ActionResult,
        source_network: NetworkSummary,
        context: RunContext,
    ) -> None:
        target_id = result.decision.target_id

        ok, _ = self._run_step(
            result,
            StepName.CLEAR_READ_ONLY,
            lambda: self.target.set_read_only(target_id, False),
        )
        if not ok:
            self.log.warning(f"Could not clear read-only flag of {target_id}; attempting update anyway")

        try:
            self._copy(result, source_network, context, target_id=target_id)
        finally:
            ok, _ = self._run_step(
                result,
                StepName.RESTORE_READ_ONLY,
                lambda: self.target.set_read_only(target_id, True),
            )
            if not ok:
                self.log.error(f"Target network {target_id} may have been left writable: restoring read-only failed")
