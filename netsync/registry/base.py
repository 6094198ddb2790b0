# =============================================================================
# Registry Interface
# =============================================================================
# Abstract interface every network registry (NDEx server) implements.
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any

from netsync.models import NetworkSummary, Permission, ProvenanceEntity

__all__ = ["NetworkRegistry", "RegistryError"]


class RegistryError(RuntimeError):
    """
    A registry call failed.

    Attributes:
        service: Registry the call was made against (usually its base route)
        status: HTTP status code, or None for transport failures
        url: Requested URL
        body: Response body (truncated in the message)
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        service: str = "",
        status: int | None = None,
        url: str = "",
        body: str = "",
    ) -> None:
        if message is None:
            message = f"{service} HTTP {status}: {url} :: {body[:500]}"
        super().__init__(message)
        self.service = service
        self.status = status
        self.url = url
        self.body = body


class NetworkRegistry(ABC):
    """
    Base class for network registries.

    Every call is a blocking round trip and may raise RegistryError. Content is
    exchanged as JSON-compatible dicts and never inspected by the sync engine.
    """

    @property
    @abstractmethod
    def base_route(self) -> str:
        """Public base URL of the registry, used to build network locators."""

    @abstractmethod
    def find_networks(
        self,
        search_string: str,
        account_name: str | None = None,
        permission: Permission | None = None,
        skip: int = 0,
        top: int = 100,
    ) -> list[NetworkSummary]:
        """Search networks, optionally scoped to an account and minimum permission."""

    @abstractmethod
    def get_network_summary(self, network_id: str) -> NetworkSummary:
        """Return the summary of one network."""

    @abstractmethod
    def get_provenance(self, network_id: str) -> ProvenanceEntity | None:
        """Return the lineage root of a network, or None when it has none."""

    @abstractmethod
    def set_provenance(self, network_id: str, provenance: ProvenanceEntity) -> None:
        """Replace the lineage of a network."""

    @abstractmethod
    def get_network(self, network_id: str) -> dict[str, Any]:
        """Return the full content of a network."""

    @abstractmethod
    def create_network(self, network: dict[str, Any]) -> NetworkSummary:
        """Create a new network from content; the registry assigns its id."""

    @abstractmethod
    def update_network(self, network: dict[str, Any]) -> NetworkSummary:
        """Overwrite the network whose ``externalId`` the content carries."""

    @abstractmethod
    def set_read_only(self, network_id: str, read_only: bool) -> None:
        """Toggle the read-only flag of a network."""

    def list_candidates(
        self,
        scope_owner: str,
        min_permission: Permission = Permission.ADMIN,
        limit: int = 100,
        offset: int = 0,
    ) -> list[NetworkSummary]:
        """List networks owned by ``scope_owner`` that may be sync targets."""
        return self.find_networks(
            "",
            account_name=scope_owner,
            permission=min_permission,
            skip=offset,
            top=limit,
        )
