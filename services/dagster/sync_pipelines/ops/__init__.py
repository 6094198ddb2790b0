"""Dagster Ops - Reusable Computation Units."""

from .sync_ops import (
    SyncPlanConfig,
    execute_sync_plan_op,
    init_sync_run_op,
    record_sync_report_op,
)

__all__ = [
    "SyncPlanConfig",
    "init_sync_run_op",
    "execute_sync_plan_op",
    "record_sync_report_op",
]
