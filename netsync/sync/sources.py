# =============================================================================
# Source Selection Strategies
# =============================================================================
# Pluggable ways of choosing which source networks a run synchronizes.
# =============================================================================

import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from netsync.models import MAX_CANDIDATES, NetworkSummary, Permission
from netsync.registry import NetworkRegistry, RegistryError

__all__ = ["SourceSelector", "QuerySourceSelector", "IdSourceSelector"]

logger = logging.getLogger(__name__)


class SourceSelector(ABC):
    """Base class for source-selection strategies."""

    @abstractmethod
    def find_source_networks(self, registry: NetworkRegistry, log=None) -> list[NetworkSummary]:
        """Return the source networks to synchronize, in processing order."""


class QuerySourceSelector(SourceSelector):
    """
    Selects sources with a text search on the source registry.

    Args:
        search_string: Search text ("" matches every readable network)
        account_name: Optional account whose networks are searched
        limit: Maximum number of sources (capped at MAX_CANDIDATES)
    """

    def __init__(
        self,
        search_string: str = "",
        account_name: str | None = None,
        limit: int = MAX_CANDIDATES,
    ) -> None:
        self.search_string = search_string
        self.account_name = account_name
        self.limit = min(limit, MAX_CANDIDATES)

    def find_source_networks(self, registry: NetworkRegistry, log=None) -> list[NetworkSummary]:
        log = log or logger
        networks = registry.find_networks(
            self.search_string,
            account_name=self.account_name,
            permission=Permission.READ,
            skip=0,
            top=self.limit,
        )
        log.info(f"Found {len(networks)} source networks matching '{self.search_string}'")
        return networks


class IdSourceSelector(SourceSelector):
    """
    Selects sources from an explicit list of network ids.

    Ids whose summary cannot be fetched are logged and skipped; duplicate ids
    are processed once.
    """

    def __init__(self, network_ids: list[str]) -> None:
        self.network_ids = list(dict.fromkeys(network_ids))

    def find_source_networks(self, registry: NetworkRegistry, log=None) -> list[NetworkSummary]:
        log = log or logger
        networks = []
        for network_id in self.network_ids:
            try:
                networks.append(registry.get_network_summary(network_id))
            except (RegistryError, ValidationError) as e:
                log.warning(f"Unable to read source network {network_id}; skipping it: {e}")
        log.info(f"Found {len(networks)} of {len(self.network_ids)} requested source networks")
        return networks
