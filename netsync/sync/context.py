# =============================================================================
# Run Context
# =============================================================================
# The state shared by every component during one synchronization run.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime

from netsync.models import (
    NetworkSummary,
    ProvenanceEntity,
    QuarantinedNetwork,
    SyncMode,
    SyncOptions,
)

__all__ = ["RunContext"]


@dataclass
class RunContext:
    """
    Snapshot of everything the decision engine reads during one run.

    Built once at run start, after provenance has been fetched and failed
    networks quarantined. Nothing in it changes for the rest of the run.

    Attributes:
        options: Engine options for this run
        sources: Source networks still eligible for synchronization
        candidates: Target networks that may be copies, in registry order
        lineage: Provenance root per network id (sources and targets)
        quarantined: Networks excluded because their provenance was unreadable
    """

    options: SyncOptions
    sources: list[NetworkSummary] = field(default_factory=list)
    candidates: list[NetworkSummary] = field(default_factory=list)
    lineage: dict[str, ProvenanceEntity] = field(default_factory=dict)
    quarantined: list[QuarantinedNetwork] = field(default_factory=list)

    @property
    def mode(self) -> SyncMode:
        if self.options.update_target_network:
            return SyncMode.UPDATE
        return SyncMode.CREATE_ONLY

    def provenance_of(self, network_id: str) -> ProvenanceEntity | None:
        return self.lineage.get(network_id)

    def last_event_end(self, network_id: str) -> datetime | None:
        """End time of the latest provenance event of a network, if recorded."""
        root = self.lineage.get(network_id)
        if root is None or root.creation_event is None:
            return None
        return root.creation_event.ended_at_time
