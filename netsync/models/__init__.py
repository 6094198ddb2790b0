# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models and schemas for network synchronization.
# =============================================================================

"""
Data models for network synchronization.

This library provides:
- NetworkSummary: Registry metadata snapshot of a network
- Provenance models: ProvenanceEntity, ProvenanceEvent, ProvenanceProperty
- Plan models: QueryCopyPlan, IdCopyPlan, SyncOptions
- Report models: SyncDecision, ActionResult, SyncReport
- Ledger models: SyncRun, SyncActionRecord
- Configuration models
"""

__version__ = "0.1.0"

# Base types
from .base import EpochMillis, NdexModel, to_epoch_millis

# Network models
from .network import NetworkSummary, Permission

# Provenance models
from .provenance import (
    COPY_EVENT,
    ProvenanceEntity,
    ProvenanceEvent,
    ProvenanceProperty,
)

# Plan models
from .plan import (
    MAX_CANDIDATES,
    IdCopyPlan,
    NdexServer,
    QueryCopyPlan,
    SyncOptions,
    SyncPlan,
    load_plan,
    parse_plan,
)

# Report models
from .report import (
    ActionResult,
    QuarantinedNetwork,
    StepName,
    StepOutcome,
    StepStatus,
    SyncAction,
    SyncDecision,
    SyncMode,
    SyncReport,
)

# Ledger models
from .run import SyncActionRecord, SyncRun, SyncRunStatus

# Configuration models
from .config import MongoSettings, NdexClientSettings

__all__ = [
    # Base types
    "EpochMillis",
    "NdexModel",
    "to_epoch_millis",
    # Network models
    "NetworkSummary",
    "Permission",
    # Provenance models
    "COPY_EVENT",
    "ProvenanceEntity",
    "ProvenanceEvent",
    "ProvenanceProperty",
    # Plan models
    "MAX_CANDIDATES",
    "IdCopyPlan",
    "NdexServer",
    "QueryCopyPlan",
    "SyncOptions",
    "SyncPlan",
    "load_plan",
    "parse_plan",
    # Report models
    "ActionResult",
    "QuarantinedNetwork",
    "StepName",
    "StepOutcome",
    "StepStatus",
    "SyncAction",
    "SyncDecision",
    "SyncMode",
    "SyncReport",
    # Ledger models
    "SyncActionRecord",
    "SyncRun",
    "SyncRunStatus",
    # Configuration models
    "MongoSettings",
    "NdexClientSettings",
]
