# =============================================================================
# Network Summary Model
# =============================================================================
# Defines the metadata snapshot of a network as reported by a registry.
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import EpochMillis, NdexModel

__all__ = ["NetworkSummary", "Permission"]


class Permission(str, Enum):
    """Minimum permission a user holds on a network, as used by NDEx search."""

    READ = "READ"
    WRITE = "WRITE"
    ADMIN = "ADMIN"


class NetworkSummary(NdexModel):
    """
    Read-only metadata snapshot of a network on one registry.

    Attributes:
        external_id: Opaque unique identifier, stable across registries
        name: Network name
        description: Network description
        modification_time: Timestamp of the last content change
        uri: Canonical locator of the network
        read_only_commit_id: Positive while the network is write-protected
    """

    external_id: str = Field(..., description="Network UUID")
    name: str | None = Field(None, description="Network name")
    description: str | None = Field(None, description="Network description")
    modification_time: EpochMillis = Field(
        ..., description="Timestamp of the last content change"
    )
    uri: str | None = Field(None, alias="URI", description="Canonical locator")
    read_only_commit_id: int = Field(
        -1, description="Positive iff the network is read-only on its registry"
    )

    @property
    def is_read_only(self) -> bool:
        """Whether the network is currently write-protected."""
        return self.read_only_commit_id > 0

    def __str__(self) -> str:
        return f"{self.name!r} ({self.external_id})"
