# =============================================================================
# Unit Tests: NDEx Resource
# =============================================================================

from netsync.registry import NdexClient
from services.dagster.sync_pipelines.resources import NdexResource


def test_get_client_uses_resource_config():
    resource = NdexResource(
        server_address="http://target.ndexbio.org/rest/",
        username="target_user",
        password="secret",
        timeout=5.0,
        retry_attempts=2,
    )

    with resource.get_client() as client:
        assert isinstance(client, NdexClient)
        assert client.base_route == "http://target.ndexbio.org/rest"
        assert client._settings.timeout == 5.0
        assert client._settings.retry_attempts == 2


def test_get_client_returns_new_client_each_call():
    resource = NdexResource(server_address="http://host/rest", username="u", password="p")

    first = resource.get_client()
    second = resource.get_client()

    assert first is not second
    first.close()
    second.close()
