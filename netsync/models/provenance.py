# =============================================================================
# Provenance Models Module
# =============================================================================
# Defines the lineage chain exchanged with NDEx:
# - ProvenanceProperty: Key/value pair attached to an entity or event
# - ProvenanceEvent: How a network state came to exist
# - ProvenanceEntity: A node in a network's provenance history
# =============================================================================

"""
Provenance (lineage) models.

A network's provenance is a linked chain: the root entity describes the
network's current state, its ``creation_event`` describes how that state was
produced, and the event's ``inputs`` are the entities it was produced from.
Only ``inputs[0]`` is ever consulted, so in practice the chain is a singly
linked history rather than a graph.
"""

from __future__ import annotations

from pydantic import Field

from .base import EpochMillis, NdexModel

__all__ = [
    "COPY_EVENT",
    "ProvenanceProperty",
    "ProvenanceEvent",
    "ProvenanceEntity",
]


COPY_EVENT = "Copy"
"""Event type recorded when a network is produced by duplicating exactly one other network."""


class ProvenanceProperty(NdexModel):
    """Key/value pair on a provenance entity or event (e.g. ``pav:retrievedFrom``)."""

    name: str = Field(..., description="Property key")
    value: str | None = Field(None, description="Property value")


class ProvenanceEvent(NdexModel):
    """
    An event in a network's provenance history.

    Attributes:
        event_type: Open vocabulary string; ``COPY_EVENT`` is privileged
        started_at_time: When the event started (optional)
        ended_at_time: When the event completed
        inputs: Entities the event consumed (conventionally exactly one)
        properties: Free-form event properties
    """

    event_type: str = Field(..., description="Event kind, e.g. 'Copy'")
    started_at_time: EpochMillis | None = Field(None, description="Event start time")
    ended_at_time: EpochMillis | None = Field(None, description="Event end time")
    inputs: list[ProvenanceEntity] = Field(
        default_factory=list, description="Input entities (index 0 is the parent)"
    )
    properties: list[ProvenanceProperty] = Field(default_factory=list)

    @property
    def is_copy(self) -> bool:
        """Whether this event is a copy event (case-insensitive)."""
        return self.event_type.lower() == COPY_EVENT.lower()

    @property
    def parent(self) -> ProvenanceEntity | None:
        """The single input consulted when walking lineage, if any."""
        return self.inputs[0] if self.inputs else None


class ProvenanceEntity(NdexModel):
    """
    A node in a network's provenance history.

    An entity without a ``creation_event`` is a history root of unknown origin.

    Attributes:
        uri: Locator of the network state this entity describes
        properties: Ordered key/value pairs; by convention index 2 holds the
            ``pav:retrievedFrom`` locator of the network this one was copied from
        creation_event: Event that produced this entity, if known
    """

    uri: str | None = Field(None, description="Locator of the described network state")
    properties: list[ProvenanceProperty] | None = Field(
        default_factory=list, description="Ordered key/value pairs"
    )
    creation_event: ProvenanceEvent | None = Field(
        None, description="Event that produced this entity"
    )

    @property
    def is_root(self) -> bool:
        """Whether this entity has unknown origin."""
        return self.creation_event is None

    def get_property(self, name: str) -> str | None:
        """Return the first property value stored under ``name``."""
        for prop in self.properties or []:
            if prop.name == name:
                return prop.value
        return None


ProvenanceEvent.model_rebuild()
ProvenanceEntity.model_rebuild()
