# =============================================================================
# Chain Walker
# =============================================================================
# Classifies a target candidate's lineage relative to one source network.
# =============================================================================

"""
Lineage chain walking.

Given the provenance root of a target candidate and the id of a source
network, decide whether the candidate is:

- DIRECT_COPY: its latest event is a copy of the source (and nothing changed
  it afterwards). The copy event's end time is reported for freshness checks.
- DERIVED_BUT_MODIFIED: a copy of the source appears further back in its
  history, but later events modified it. Such a candidate must never be
  overwritten.
- UNRELATED: anything else, including every ambiguous case (unknown origin,
  missing or malformed parent locator, empty derivation chain).

Only ``inputs[0]`` of each event is consulted. The chain must be finite and
acyclic; the walker does not guard against cycles.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from netsync.models import ProvenanceEntity, ProvenanceEvent

from .ancestry import AncestryExtractor, default_extractor

__all__ = ["Lineage", "ChainMatch", "walk_chain"]

logger = logging.getLogger(__name__)


class Lineage(str, Enum):
    """Relationship of a target candidate to a source network."""

    UNRELATED = "unrelated"
    DIRECT_COPY = "direct_copy"
    DERIVED_BUT_MODIFIED = "derived_but_modified"


@dataclass(frozen=True)
class ChainMatch:
    """
    Result of walking one candidate's lineage.

    Attributes:
        lineage: Relationship to the source network
        copy_event: The copy event that links candidate and source, if any
        reason: Why the walk stopped where it did
    """

    lineage: Lineage
    copy_event: Optional[ProvenanceEvent] = None
    reason: str = ""

    @property
    def ended_at(self) -> Optional[datetime]:
        """End time of the linking copy event, if known."""
        return self.copy_event.ended_at_time if self.copy_event else None

    @property
    def is_direct_copy(self) -> bool:
        return self.lineage == Lineage.DIRECT_COPY


def _unrelated(reason: str) -> ChainMatch:
    return ChainMatch(Lineage.UNRELATED, reason=reason)


def walk_chain(
    root: ProvenanceEntity | None,
    source_id: str,
    extractor: AncestryExtractor | None = None,
) -> ChainMatch:
    """
    Classify a candidate's lineage relative to ``source_id``.

    Args:
        root: Provenance root of the target candidate (None if it has none)
        source_id: External id of the source network
        extractor: Strategy that recovers parent ids (positional by default)

    Returns:
        ChainMatch describing the relationship
    """
    extractor = extractor or default_extractor()

    if root is None:
        return _unrelated("no provenance")

    event = root.creation_event
    if event is None:
        return _unrelated("unknown origin")

    if event.is_copy:
        parent_id = extractor.extract(root)
        if parent_id is None:
            logger.info(f"Ambiguous copy lineage for {root.uri}: parent id unavailable")
            return _unrelated("copy event without parseable parent locator")
        if parent_id != source_id:
            return _unrelated(f"copy of {parent_id}")
        return ChainMatch(Lineage.DIRECT_COPY, copy_event=event, reason=f"direct copy of {source_id}")

    # Latest event is not a copy: the candidate was modified after its most
    # recent derivation. Walk back to the nearest copy event.
    inputs = event.inputs
    while inputs:
        ancestor = inputs[0]
        ancestor_event = ancestor.creation_event
        if ancestor_event is None:
            return _unrelated("history ends at entity of unknown origin")

        if ancestor_event.is_copy:
            parent_id = extractor.extract(ancestor)
            if parent_id == source_id:
                return ChainMatch(
                    Lineage.DERIVED_BUT_MODIFIED,
                    copy_event=ancestor_event,
                    reason=f"modified after copy of {source_id}",
                )
            if parent_id is None:
                return _unrelated("earlier copy event without parseable parent locator")
            return _unrelated(f"modified copy of {parent_id}")

        inputs = ancestor_event.inputs

    return _unrelated("no copy event in history")
