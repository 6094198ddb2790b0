"""Provenance parsing, lineage chain walking and copy-history building."""

from .ancestry import (
    RETRIEVED_FROM,
    AncestryExtractor,
    KeyedAncestryExtractor,
    PositionalAncestryExtractor,
    default_extractor,
)
from .chain import ChainMatch, Lineage, walk_chain
from .fetcher import LineageFetch, fetch_lineage
from .history import create_copy_provenance, minimal_entity

__all__ = [
    "RETRIEVED_FROM",
    "AncestryExtractor",
    "KeyedAncestryExtractor",
    "PositionalAncestryExtractor",
    "default_extractor",
    "ChainMatch",
    "Lineage",
    "walk_chain",
    "LineageFetch",
    "fetch_lineage",
    "create_copy_provenance",
    "minimal_entity",
]
