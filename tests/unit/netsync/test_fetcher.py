# =============================================================================
# Unit Tests: Provenance Fetcher
# =============================================================================

from unittest.mock import Mock

import httpx
from pydantic import ValidationError
from tenacity import wait_none

from netsync.models import NdexServer, NetworkSummary
from netsync.provenance import fetch_lineage
from netsync.registry import NdexClient, RegistryError


class TestFetchLineage:
    """Tests for fetch_lineage function."""

    def test_stores_provenance_per_network(self, source_registry, make_summary, copy_provenance):
        s1 = source_registry.add(make_summary("S1"), copy_provenance("X", 5))
        s2 = source_registry.add(make_summary("S2"), copy_provenance("Y", 5))

        result = fetch_lineage(source_registry, [s1, s2], role="source")

        assert set(result.lineage) == {"S1", "S2"}
        assert result.networks == [s1, s2]
        assert result.quarantined == []

    def test_missing_provenance_keeps_network(self, source_registry, make_summary):
        s1 = source_registry.add(make_summary("S1"))

        result = fetch_lineage(source_registry, [s1], role="source")

        assert result.lineage == {}
        assert result.networks == [s1]
        assert result.quarantined == []

    def test_failed_retrieval_quarantines(self, source_registry, make_summary, copy_provenance):
        s1 = source_registry.add(make_summary("S1"), copy_provenance("X", 5))
        s3 = source_registry.add(make_summary("S3"), copy_provenance("Y", 5))
        source_registry.fail("get_provenance", "S3")
        log = Mock()

        result = fetch_lineage(source_registry, [s1, s3], role="source", log=log)

        assert result.networks == [s1]
        assert "S3" not in result.lineage
        assert len(result.quarantined) == 1
        assert result.quarantined[0].network_id == "S3"
        assert result.quarantined[0].role == "source"
        assert "get_provenance failed" in result.quarantined[0].reason
        log.warning.assert_called_once()
        assert "S3" in str(log.warning.call_args)

    def test_unparseable_provenance_quarantines(self, make_summary):
        registry = Mock()
        try:
            NetworkSummary.model_validate({})
        except ValidationError as e:
            registry.get_provenance.side_effect = e

        result = fetch_lineage(registry, [make_summary("T1")], role="target")

        assert result.networks == []
        assert result.quarantined[0].role == "target"

    def test_input_list_not_modified(self, source_registry, make_summary):
        networks = [source_registry.add(make_summary("S1")), source_registry.add(make_summary("S2"))]
        source_registry.fail("get_provenance", "S1")

        fetch_lineage(source_registry, networks, role="source")

        assert [n.external_id for n in networks] == ["S1", "S2"]

    def test_non_json_body_quarantines_only_that_network(self, make_summary):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/S3/provenance"):
                return httpx.Response(200, text="<html>gateway</html>")
            return httpx.Response(404, text="not found")

        server = NdexServer(server_address="http://source.ndexbio.org/rest", username="user", password="secret")
        log = Mock()

        with NdexClient(server, transport=httpx.MockTransport(handler), wait=wait_none()) as client:
            result = fetch_lineage(client, [make_summary("S1"), make_summary("S3")], role="source", log=log)

        assert [n.external_id for n in result.networks] == ["S1"]
        assert [q.network_id for q in result.quarantined] == ["S3"]
        assert "non-JSON" in result.quarantined[0].reason
        log.warning.assert_called_once()

    def test_registry_error_keeps_status(self, make_summary):
        registry = Mock()
        registry.get_provenance.side_effect = RegistryError(service="svc", status=503, url="/network/S1/provenance")

        result = fetch_lineage(registry, [make_summary("S1")], role="source")

        assert "503" in result.quarantined[0].reason
