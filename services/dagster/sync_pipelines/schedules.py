"""Dagster Schedules - Recurring sync runs."""

import os

from dagster import DefaultScheduleStatus, RunRequest, ScheduleEvaluationContext, schedule

from .jobs import sync_networks_job

__all__ = ["nightly_sync_schedule", "DEFAULT_PLAN_PATH"]

DEFAULT_PLAN_PATH = "/opt/netsync/plans/nightly.json"


@schedule(
    name="nightly_sync_schedule",
    job=sync_networks_job,
    cron_schedule="0 2 * * *",
    default_status=DefaultScheduleStatus.STOPPED,
    description="Nightly run of the default sync plan (enable once the plan file is deployed)",
)
def nightly_sync_schedule(context: ScheduleEvaluationContext) -> RunRequest:
    """
    Request one sync run per tick.

    NETSYNC_PLAN_PATH is read on every evaluation, so changing it does not
    require reloading the code location.
    """
    plan_path = os.getenv("NETSYNC_PLAN_PATH", DEFAULT_PLAN_PATH)
    return RunRequest(
        run_config={
            "ops": {
                "init_sync_run_op": {"config": {"plan_path": plan_path}},
            }
        },
        tags={"netsync/plan_path": plan_path},
    )
