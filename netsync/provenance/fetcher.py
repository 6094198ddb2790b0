# =============================================================================
# Provenance Fetcher
# =============================================================================
# Bulk-retrieves provenance roots for a list of networks and quarantines the
# networks whose provenance could not be read.
# =============================================================================

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from netsync.models import NetworkSummary, ProvenanceEntity, QuarantinedNetwork
from netsync.registry import NetworkRegistry, RegistryError

__all__ = ["LineageFetch", "fetch_lineage"]

logger = logging.getLogger(__name__)


@dataclass
class LineageFetch:
    """
    Result of fetching provenance for one list of networks.

    Attributes:
        lineage: Provenance root per network id (networks without provenance
            have no entry)
        networks: Networks that remain eligible, in their original order
        quarantined: Networks excluded because retrieval failed
    """

    lineage: dict[str, ProvenanceEntity] = field(default_factory=dict)
    networks: list[NetworkSummary] = field(default_factory=list)
    quarantined: list[QuarantinedNetwork] = field(default_factory=list)


def fetch_lineage(
    registry: NetworkRegistry,
    networks: list[NetworkSummary],
    *,
    role: str,
    log=None,
) -> LineageFetch:
    """
    Fetch the provenance root of every network.

    A registry answer of "no provenance" keeps the network (it simply has no
    map entry). A failed retrieval removes the network from the run: it is
    never treated as a history root.

    Args:
        registry: Registry holding the networks
        networks: Networks to fetch provenance for (not modified)
        role: "source" or "target", used in logs and quarantine records
        log: Logger to use (defaults to this module's logger)

    Returns:
        LineageFetch with the lineage map, kept networks and quarantined ones
    """
    log = log or logger
    result = LineageFetch()

    log.info(f"Getting provenance history for {len(networks)} {role} networks")

    for network in networks:
        network_id = network.external_id
        try:
            provenance = registry.get_provenance(network_id)
        except (RegistryError, ValidationError) as e:
            log.warning(f"Unable to read provenance of {role} network {network_id}; excluding it from this run: {e}")
            result.quarantined.append(
                QuarantinedNetwork(network_id=network_id, role=role, reason=str(e))
            )
            continue

        if provenance is not None:
            log.info(f"Storing provenance for {role} network {network_id}")
            result.lineage[network_id] = provenance
        result.networks.append(network)

    return result
