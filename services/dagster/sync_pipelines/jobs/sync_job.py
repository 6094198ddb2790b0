"""Network synchronization job (op-based)."""

from dagster import job

from ..ops import execute_sync_plan_op, init_sync_run_op, record_sync_report_op


@job(
    name="sync_networks_job",
    description="Copies or refreshes source NDEx networks on the target server based on provenance lineage",
)
def sync_networks_job():
    """
    Run one sync plan and record it in MongoDB.

    Pipeline flow:
    1. init_sync_run_op: Validates the plan file and creates the run document
    2. execute_sync_plan_op: Decides and executes one action per source network
    3. record_sync_report_op: Stores per-network action records and completes the run

    The plan file path is passed to init_sync_run_op via run config.
    """
    plan_info = init_sync_run_op()
    report_json = execute_sync_plan_op(plan_info)
    record_sync_report_op(report_json)
