# =============================================================================
# Network Sync Shared Library
# =============================================================================
# This package contains the provenance-based synchronization library used to
# copy NDEx networks from a source server to a target server.
# See individual sub-packages for detailed documentation.
# =============================================================================

"""
Provenance-based network synchronization.

Sub-packages:
- models: Pydantic data models, plan files and settings
- provenance: Lineage parsing, chain walking and copy-history building
- sync: Decision engine, executor and run orchestration
- registry: Registry interface and the NDEx REST client
"""

__version__ = "0.1.0"
