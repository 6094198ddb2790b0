"""
Shared pytest fixtures for sync tests.

Provides network summary and provenance factories plus an in-memory
registry so that engine, executor and decision tests run without a server.
"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from netsync.models import (
    COPY_EVENT,
    NetworkSummary,
    ProvenanceEntity,
    ProvenanceEvent,
    ProvenanceProperty,
    SyncOptions,
)
from netsync.registry import NetworkRegistry, RegistryError
from netsync.uri_utils import network_uri


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)
SOURCE_ROUTE = "http://source.ndexbio.org/rest"
TARGET_ROUTE = "http://target.ndexbio.org/rest"


def _at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


# =============================================================================
# In-memory Registry
# =============================================================================

class FakeRegistry(NetworkRegistry):
    """
    In-memory NetworkRegistry.

    Every call is appended to ``calls`` as ``(method, *args)``. Failures are
    injected per method and network id with ``fail()``.
    """

    def __init__(self, base_route: str, id_prefix: str = "new"):
        self._base_route = base_route
        self._ids = (f"{id_prefix}-{n}" for n in itertools.count(1))
        self.summaries: dict[str, NetworkSummary] = {}
        self.provenance: dict[str, ProvenanceEntity] = {}
        self.content: dict[str, dict[str, Any]] = {}
        self.failures: dict[tuple[str, str | None], Exception] = {}
        self.calls: list[tuple] = []
        self.write_time = _at(1000)

    @property
    def base_route(self) -> str:
        return self._base_route

    def add(self, summary: NetworkSummary, provenance: ProvenanceEntity | None = None) -> NetworkSummary:
        self.summaries[summary.external_id] = summary
        self.content[summary.external_id] = {
            "externalId": summary.external_id,
            "name": summary.name,
            "nodes": {},
            "edges": {},
        }
        if provenance is not None:
            self.provenance[summary.external_id] = provenance
        return summary

    def fail(self, method: str, network_id: str | None = None, error: Exception | None = None) -> None:
        self.failures[(method, network_id)] = error or RegistryError(
            f"{method} failed", service=self._base_route, status=500
        )

    def _call(self, method: str, network_id: str | None = None, *args) -> None:
        self.calls.append((method, network_id, *args))
        error = self.failures.get((method, network_id)) or self.failures.get((method, None))
        if error is not None:
            raise error

    def called(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    def find_networks(self, search_string, account_name=None, permission=None, skip=0, top=100):
        self._call("find_networks", None, search_string, account_name, permission, skip, top)
        return list(self.summaries.values())[:top]

    def get_network_summary(self, network_id):
        self._call("get_network_summary", network_id)
        if network_id not in self.summaries:
            raise RegistryError(service=self._base_route, status=404, url=f"/network/{network_id}")
        return self.summaries[network_id]

    def get_provenance(self, network_id):
        self._call("get_provenance", network_id)
        return self.provenance.get(network_id)

    def set_provenance(self, network_id, provenance):
        self._call("set_provenance", network_id)
        self.provenance[network_id] = provenance

    def get_network(self, network_id):
        self._call("get_network", network_id)
        return dict(self.content[network_id])

    def create_network(self, network):
        self._call("create_network", None)
        network_id = next(self._ids)
        summary = NetworkSummary(
            external_id=network_id,
            name=network.get("name"),
            modification_time=self.write_time,
        )
        self.summaries[network_id] = summary
        self.content[network_id] = dict(network, externalId=network_id)
        return summary

    def update_network(self, network):
        network_id = network["externalId"]
        self._call("update_network", network_id)
        summary = self.summaries[network_id].model_copy(update={"modification_time": self.write_time})
        self.summaries[network_id] = summary
        self.content[network_id] = dict(network)
        return summary

    def set_read_only(self, network_id, read_only):
        self._call("set_read_only", network_id, read_only)
        commit_id = 1 if read_only else -1
        self.summaries[network_id] = self.summaries[network_id].model_copy(
            update={"read_only_commit_id": commit_id}
        )


# =============================================================================
# Timestamp Fixtures
# =============================================================================

@pytest.fixture
def at():
    """Convert minute offsets into tz-aware timestamps (at(10) is 10 minutes after BASE_TIME)."""
    return _at


# =============================================================================
# Network Summary Fixtures
# =============================================================================

@pytest.fixture
def make_summary():
    """Factory for NetworkSummary instances; ``modified`` is a minute offset."""

    def _make(
        network_id: str,
        modified: int = 0,
        *,
        read_only: bool = False,
        name: str | None = None,
        description: str | None = None,
        uri: str | None = None,
    ) -> NetworkSummary:
        return NetworkSummary(
            external_id=network_id,
            name=name or f"Network {network_id}",
            description=description,
            modification_time=_at(modified),
            uri=uri,
            read_only_commit_id=7 if read_only else -1,
        )

    return _make


# =============================================================================
# Provenance Fixtures
# =============================================================================

@pytest.fixture
def copy_provenance():
    """
    Factory for a provenance root whose latest event copies ``parent_id``.

    The parent locator is stored as the third property (pav:retrievedFrom).
    """

    def _make(
        parent_id: str,
        ended_at: int | None,
        *,
        base_route: str = SOURCE_ROUTE,
        parent: ProvenanceEntity | None = None,
        uri: str | None = None,
    ) -> ProvenanceEntity:
        parent_uri = network_uri(base_route, parent_id)
        return ProvenanceEntity(
            uri=uri,
            properties=[
                ProvenanceProperty(name="dc:title", value=f"Network {parent_id}"),
                ProvenanceProperty(name="dc:description", value=""),
                ProvenanceProperty(name="pav:retrievedFrom", value=parent_uri),
            ],
            creation_event=ProvenanceEvent(
                event_type=COPY_EVENT,
                ended_at_time=_at(ended_at) if ended_at is not None else None,
                inputs=[parent or ProvenanceEntity(uri=parent_uri)],
            ),
        )

    return _make


@pytest.fixture
def modified_provenance():
    """Factory wrapping an entity in a later, non-copy event."""

    def _make(inner: ProvenanceEntity, ended_at: int, event_type: str = "Program Edit") -> ProvenanceEntity:
        return ProvenanceEntity(
            uri=inner.uri,
            properties=[],
            creation_event=ProvenanceEvent(
                event_type=event_type,
                ended_at_time=_at(ended_at),
                inputs=[inner],
            ),
        )

    return _make


# =============================================================================
# Registry Fixtures
# =============================================================================

@pytest.fixture
def source_registry():
    """Empty in-memory source registry."""
    return FakeRegistry(SOURCE_ROUTE, id_prefix="src")


@pytest.fixture
def target_registry():
    """Empty in-memory target registry."""
    return FakeRegistry(TARGET_ROUTE, id_prefix="copy")


@pytest.fixture
def create_only_options():
    return SyncOptions()


@pytest.fixture
def update_options():
    return SyncOptions(update_target_network=True)


@pytest.fixture
def valid_plan_dict():
    """Minimal valid QueryCopyPlan dictionary (camelCase keys as in plan files)."""
    return {
        "planType": "QueryCopyPlan",
        "source": {
            "serverAddress": SOURCE_ROUTE,
            "username": "source_user",
            "password": "source_pass",
        },
        "target": {
            "serverAddress": TARGET_ROUTE + "/",
            "username": "target_user",
            "password": "target_pass",
        },
        "searchString": "BEL",
        "sourceAccountName": "ndexbio",
    }
