# =============================================================================
# Copy History Builder
# =============================================================================
# Builds the provenance written to a target network after it has been created
# or refreshed from a source network.
# =============================================================================

"""Copy provenance construction."""

from datetime import datetime, timezone

from netsync.models import (
    COPY_EVENT,
    NetworkSummary,
    ProvenanceEntity,
    ProvenanceEvent,
    ProvenanceProperty,
)
from netsync.uri_utils import network_uri

from .ancestry import RETRIEVED_FROM

__all__ = ["DC_TITLE", "DC_DESCRIPTION", "minimal_entity", "create_copy_provenance"]

DC_TITLE = "dc:title"
DC_DESCRIPTION = "dc:description"


def minimal_entity(network: NetworkSummary, base_route: str) -> ProvenanceEntity:
    """
    Synthesize a provenance entity for a network that has no history.

    Args:
        network: Network the entity describes
        base_route: Base route of the registry holding the network

    Returns:
        Root entity (no creation event) whose uri locates the network
    """
    properties = []
    if network.name is not None:
        properties.append(ProvenanceProperty(name=DC_TITLE, value=network.name))
    return ProvenanceEntity(
        uri=network.uri or network_uri(base_route, network.external_id),
        properties=properties,
    )


def create_copy_provenance(
    copied: NetworkSummary,
    source: NetworkSummary,
    source_entity: ProvenanceEntity | None,
    *,
    source_base_route: str,
    target_base_route: str,
    now: datetime | None = None,
) -> ProvenanceEntity:
    """
    Build the provenance of a freshly written copy.

    The entity's properties are always, in order, ``dc:title``,
    ``dc:description`` and ``pav:retrievedFrom`` so the parent locator sits at
    index 2 where positional readers expect it.

    Args:
        copied: Summary of the target network as returned by the write
        source: Summary of the source network
        source_entity: Current provenance root of the source (None if it has none)
        source_base_route: Base route of the source registry
        target_base_route: Base route of the target registry
        now: End time of the copy event (defaults to the current UTC time)

    Returns:
        Provenance root for the copy with a single Copy event
    """
    now = now or datetime.now(timezone.utc)
    if source_entity is None:
        source_entity = minimal_entity(source, source_base_route)

    event = ProvenanceEvent(
        event_type=COPY_EVENT,
        started_at_time=now,
        ended_at_time=now,
        inputs=[source_entity],
    )

    source_locator = source.uri or network_uri(source_base_route, source.external_id)
    return ProvenanceEntity(
        uri=copied.uri or network_uri(target_base_route, copied.external_id),
        properties=[
            ProvenanceProperty(name=DC_TITLE, value=source.name or ""),
            ProvenanceProperty(name=DC_DESCRIPTION, value=source.description or ""),
            ProvenanceProperty(name=RETRIEVED_FROM, value=source_locator),
        ],
        creation_event=event,
    )
