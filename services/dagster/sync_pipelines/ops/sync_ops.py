# =============================================================================
# Sync Ops - Network Synchronization Run
# =============================================================================
# Loads a sync plan, runs the decision engine and executor against the
# source and target NDEx servers, and records the outcome in MongoDB.
# =============================================================================

"""Operations of the network synchronization job."""

from pathlib import Path
from typing import Any, Dict

from dagster import Config, OpExecutionContext, op
from pydantic import Field

from netsync.models import SyncActionRecord, SyncReport, load_plan
from netsync.sync import run_plan


__all__ = [
    "SyncPlanConfig",
    "init_sync_run_op",
    "execute_sync_plan_op",
    "record_sync_report_op",
]


class SyncPlanConfig(Config):
    """Run configuration for the sync job."""

    plan_path: str = Field(..., description="Path of the JSON plan file to execute")


def _init_sync_run(mongodb, dagster_run_id: str, plan_path: str, log) -> Dict[str, Any]:
    """
    Core logic for validating the plan and opening the ledger run.

    Extracted for unit testing without a Dagster context.

    Args:
        mongodb: MongoDBResource instance
        dagster_run_id: Dagster run ID
        plan_path: Plan file to execute
        log: Logger instance (context.log)

    Returns:
        Plan info dict with plan_path, plan_name and plan_type

    Raises:
        FileNotFoundError: If the plan file does not exist
        pydantic.ValidationError: If the plan is malformed
    """
    plan_name = Path(plan_path).name
    log.info(f"Initializing sync run in MongoDB: run_id={dagster_run_id}, plan={plan_name}")

    try:
        plan = load_plan(plan_path)
    except Exception as e:
        mongodb.insert_sync_run(dagster_run_id=dagster_run_id, plan_name=plan_name)
        mongodb.fail_sync_run(dagster_run_id, f"Invalid plan {plan_name}: {e}")
        raise

    run_id = mongodb.insert_sync_run(dagster_run_id=dagster_run_id, plan_name=plan_name)
    log.info(f"Created sync run document: {run_id}")

    return {
        "plan_path": str(plan_path),
        "plan_name": plan_name,
        "plan_type": plan.plan_type,
    }


def _execute_sync_plan(
    mongodb,
    source_ndex,
    target_ndex,
    dagster_run_id: str,
    plan_info: Dict[str, Any],
    log,
) -> Dict[str, Any]:
    """
    Core logic for executing a sync plan.

    Server connections come from the NDEx resources; the plan file supplies
    the source selection and engine options. Target candidates are scoped to
    the plan's targetGroupName, else to the account of the target resource
    (the account copies are created under).

    Args:
        mongodb: MongoDBResource instance
        source_ndex: NdexResource of the source server
        target_ndex: NdexResource of the target server
        dagster_run_id: Dagster run ID
        plan_info: Output of init_sync_run_op
        log: Logger instance (context.log)

    Returns:
        The SyncReport as a JSON-compatible dict

    Raises:
        Exception: Any run-level failure, after marking the ledger run as failed
    """
    try:
        plan = load_plan(plan_info["plan_path"])
        candidate_owner = plan.target_group_name or target_ndex.username
        log.info(f"Scoping target candidates to account {candidate_owner}")
        with source_ndex.get_client() as source, target_ndex.get_client() as target:
            report = run_plan(plan, source=source, target=target, candidate_owner=candidate_owner, log=log)
    except Exception as e:
        log.error(f"Sync run {dagster_run_id} failed: {e}")
        mongodb.fail_sync_run(dagster_run_id, str(e))
        raise

    log.info(
        f"Sync plan {plan_info['plan_name']} finished: {report.counts()}, "
        f"{len(report.failed)} failed, {len(report.quarantined)} quarantined"
    )
    return report.model_dump(mode="json")


def _record_sync_report(mongodb, dagster_run_id: str, report_json: Dict[str, Any], log) -> Dict[str, Any]:
    """
    Core logic for persisting a sync report to the ledger.

    Args:
        mongodb: MongoDBResource instance
        dagster_run_id: Dagster run ID
        report_json: Report dict produced by execute_sync_plan_op
        log: Logger instance (context.log)

    Returns:
        Summary dict with counts, failed source ids and quarantined ids
    """
    report = SyncReport.model_validate(report_json)
    records = [SyncActionRecord.from_result(dagster_run_id, result) for result in report.results]

    inserted = mongodb.insert_action_records(records)
    mongodb.complete_sync_run(dagster_run_id, report)
    log.info(f"Recorded {len(inserted)} sync actions for run {dagster_run_id}")

    failed_ids = [result.decision.source_id for result in report.failed]
    if failed_ids:
        log.warning(f"{len(failed_ids)} source networks were not reconciled: {failed_ids}")

    return {
        "counts": report.counts(),
        "failed_source_ids": failed_ids,
        "quarantined_ids": [q.network_id for q in report.quarantined],
    }


@op(required_resource_keys={"mongodb"})
def init_sync_run_op(context: OpExecutionContext, config: SyncPlanConfig) -> dict:
    """
    Validate the plan file and create the run document in MongoDB.

    This op is the first step of the sync job so that the run document exists
    before any registry is touched.

    Args:
        context: Dagster op execution context
        config: Plan location

    Returns:
        Plan info dict for downstream ops
    """
    return _init_sync_run(
        mongodb=context.resources.mongodb,
        dagster_run_id=context.run_id,
        plan_path=config.plan_path,
        log=context.log,
    )


@op(required_resource_keys={"mongodb", "source_ndex", "target_ndex"})
def execute_sync_plan_op(context: OpExecutionContext, plan_info: dict) -> dict:
    """
    Decide and execute one action per source network.

    Per-network failures are part of the returned report; only run-level
    failures (e.g. the source server cannot be searched) fail the op.

    Args:
        context: Dagster op execution context
        plan_info: Output of init_sync_run_op

    Returns:
        The SyncReport as a JSON-compatible dict
    """
    return _execute_sync_plan(
        mongodb=context.resources.mongodb,
        source_ndex=context.resources.source_ndex,
        target_ndex=context.resources.target_ndex,
        dagster_run_id=context.run_id,
        plan_info=plan_info,
        log=context.log,
    )


@op(required_resource_keys={"mongodb"})
def record_sync_report_op(context: OpExecutionContext, report_json: dict) -> dict:
    """
    Store the per-network action records and complete the run document.

    Args:
        context: Dagster op execution context
        report_json: Output of execute_sync_plan_op

    Returns:
        Run summary dict
    """
    return _record_sync_report(
        mongodb=context.resources.mongodb,
        dagster_run_id=context.run_id,
        report_json=report_json,
        log=context.log,
    )
