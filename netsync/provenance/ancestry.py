# =============================================================================
# Ancestry Extraction
# =============================================================================
# Recovers the id of the network a provenance entity was copied from.
# =============================================================================

"""
Ancestry extractors.

Copy provenance written by NDEx tooling records the locator of the parent
network in a ``pav:retrievedFrom`` property. Historically that property is
read by position (index 2) rather than by key, which is a convention and not
a schema guarantee. Both lookups are provided behind one interface so the
chain walker never depends on either.

"Unknown ancestry" is a normal outcome and is reported as ``None``.
"""

import logging
from abc import ABC, abstractmethod

from netsync.models import ProvenanceEntity
from netsync.uri_utils import last_path_segment

__all__ = [
    "RETRIEVED_FROM",
    "AncestryExtractor",
    "PositionalAncestryExtractor",
    "KeyedAncestryExtractor",
    "default_extractor",
]

logger = logging.getLogger(__name__)

RETRIEVED_FROM = "pav:retrievedFrom"


def _id_from_locator(locator: str | None) -> str | None:
    if locator is None:
        return None
    try:
        return last_path_segment(locator)
    except ValueError as e:
        logger.info(f"Unable to parse parent network locator: {e}")
        return None


class AncestryExtractor(ABC):
    """Base class for strategies that find the parent network id of an entity."""

    @abstractmethod
    def locator(self, entity: ProvenanceEntity) -> str | None:
        """Return the raw parent locator stored on ``entity``, if present."""

    def extract(self, entity: ProvenanceEntity) -> str | None:
        """
        Return the id of the network ``entity`` was derived from.

        Returns:
            The final path segment of the parent locator, or None when the
            ancestry is unknown (property missing, locator malformed or without
            a path segment)
        """
        return _id_from_locator(self.locator(entity))


class PositionalAncestryExtractor(AncestryExtractor):
    """Reads the parent locator from a fixed position in the property list."""

    def __init__(self, index: int = 2) -> None:
        self.index = index

    def locator(self, entity: ProvenanceEntity) -> str | None:
        properties = entity.properties
        if not properties or len(properties) <= self.index:
            logger.info(
                f"Parent locator missing: entity {entity.uri} has fewer than "
                f"{self.index + 1} provenance properties"
            )
            return None
        return properties[self.index].value


class KeyedAncestryExtractor(AncestryExtractor):
    """Reads the parent locator from the first property with a given key."""

    def __init__(self, key: str = RETRIEVED_FROM) -> None:
        self.key = key

    def locator(self, entity: ProvenanceEntity) -> str | None:
        value = entity.get_property(self.key)
        if value is None:
            logger.info(f"Parent locator missing: entity {entity.uri} has no '{self.key}' property")
        return value


def default_extractor() -> AncestryExtractor:
    """The extractor used when none is configured (positional, index 2)."""
    return PositionalAncestryExtractor()
