"""Sync decision engine, executor and run orchestration."""

from .context import RunContext
from .decision import decide, decide_create_only, decide_update
from .engine import SyncEngine, run_plan
from .executor import SyncExecutor
from .sources import IdSourceSelector, QuerySourceSelector, SourceSelector

__all__ = [
    "RunContext",
    "decide",
    "decide_create_only",
    "decide_update",
    "SyncEngine",
    "run_plan",
    "SyncExecutor",
    "IdSourceSelector",
    "QuerySourceSelector",
    "SourceSelector",
]
