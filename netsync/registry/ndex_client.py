# =============================================================================
# NDEx Client - REST API Operations
# =============================================================================
# Blocking httpx client for the NDEx v1 REST API implementing NetworkRegistry.
# =============================================================================

import logging
from typing import Any, Optional

import httpx
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from netsync.models import (
    NdexClientSettings,
    NdexServer,
    NetworkSummary,
    Permission,
    ProvenanceEntity,
)

from .base import NetworkRegistry, RegistryError

__all__ = ["NdexClient"]

logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
    """Transport failures and 5xx responses are worth retrying; 4xx are not."""
    if not isinstance(exc, RegistryError):
        return False
    return exc.status is None or exc.status >= 500


class NdexClient(NetworkRegistry):
    """
    Client for one NDEx server.

    Reads (GET) are retried with exponential backoff on transport errors and
    5xx responses. Writes are sent exactly once.

    Usage:
        with NdexClient(server) as client:
            summaries = client.find_networks("BEL", account_name="ndexbio")
    """

    def __init__(
        self,
        server: NdexServer,
        settings: Optional[NdexClientSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        wait=None,
    ) -> None:
        self._server = server
        self._settings = settings or NdexClientSettings()
        self._wait = wait or wait_exponential_jitter(initial=0.2, max=2.0)
        self._client = httpx.Client(
            base_url=server.server_address,
            auth=(server.username, server.password),
            timeout=self._settings.timeout,
            headers={
                "Accept": "application/json",
                "User-Agent": self._settings.user_agent,
            },
            transport=transport,
        )

    def __enter__(self) -> "NdexClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def base_route(self) -> str:
        return self._server.server_address

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def _raise_for_status(self, response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RegistryError(
                service=self.base_route,
                status=response.status_code,
                url=str(response.request.url),
                body=response.text,
            ) from e

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise RegistryError(
                f"{self.base_route} {method} {url} failed: {e}",
                service=self.base_route,
                url=url,
            ) from e
        self._raise_for_status(response)
        return response

    def _get(self, url: str) -> httpx.Response:
        """GET with retries for transient failures."""
        retrying = Retrying(
            stop=stop_after_attempt(self._settings.retry_attempts),
            wait=self._wait,
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return self._send("GET", url)
        raise AssertionError("unreachable")

    def _json(self, response: httpx.Response) -> Any:
        """Decode a JSON body; an empty body is None, an undecodable one raises RegistryError."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RegistryError(
                f"{self.base_route} returned a non-JSON body for {response.request.url}: {response.text[:200]}",
                service=self.base_route,
                status=response.status_code,
                url=str(response.request.url),
                body=response.text,
            ) from e

    # ------------------------------------------------------------------
    # Network discovery
    # ------------------------------------------------------------------

    def find_networks(
        self,
        search_string: str,
        account_name: str | None = None,
        permission: Permission | None = None,
        skip: int = 0,
        top: int = 100,
    ) -> list[NetworkSummary]:
        """
        Search networks on the server.

        Args:
            search_string: Free text search ("" matches everything)
            account_name: Restrict to networks of this account
            permission: Minimum permission the account holds on the network
            skip: Number of result blocks to skip
            top: Block size (maximum results)

        Returns:
            List of NetworkSummary in server order
        """
        body: dict[str, Any] = {"searchString": search_string, "includeGroups": True}
        if account_name:
            body["accountName"] = account_name
        if permission:
            body["permission"] = permission.value

        response = self._send("POST", f"/network/search/{skip}/{top}", json=body)
        results = self._json(response) or []
        logger.debug(f"Search '{search_string}' on {self.base_route} returned {len(results)} networks")
        return [NetworkSummary.model_validate(item) for item in results]

    def get_network_summary(self, network_id: str) -> NetworkSummary:
        response = self._get(f"/network/{network_id}")
        return NetworkSummary.model_validate(self._json(response))

    # ------------------------------------------------------------------
    # Provenance
    # ------------------------------------------------------------------

    def get_provenance(self, network_id: str) -> ProvenanceEntity | None:
        """
        Return the provenance root of a network.

        A 404 or an empty body means the network has no provenance and
        yields None; any other failure raises RegistryError.
        """
        try:
            response = self._get(f"/network/{network_id}/provenance")
        except RegistryError as e:
            if e.status == 404:
                return None
            raise
        data = self._json(response)
        if not data:
            return None
        return ProvenanceEntity.model_validate(data)

    def set_provenance(self, network_id: str, provenance: ProvenanceEntity) -> None:
        self._send("PUT", f"/network/{network_id}/provenance", json=provenance.to_wire())

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def get_network(self, network_id: str) -> dict[str, Any]:
        response = self._get(f"/network/{network_id}/asNetwork")
        content = self._json(response)
        if not isinstance(content, dict):
            raise RegistryError(
                f"{self.base_route} returned no network content for {network_id}",
                service=self.base_route,
                status=response.status_code,
                url=str(response.request.url),
                body=response.text,
            )
        return content

    def create_network(self, network: dict[str, Any]) -> NetworkSummary:
        response = self._send("POST", "/network/asNetwork", json=network)
        return NetworkSummary.model_validate(self._json(response))

    def update_network(self, network: dict[str, Any]) -> NetworkSummary:
        response = self._send("POST", "/network/asNetwork/update", json=network)
        return NetworkSummary.model_validate(self._json(response))

    def set_read_only(self, network_id: str, read_only: bool) -> None:
        flag = "true" if read_only else "false"
        self._send("GET", f"/network/{network_id}/setFlag/readOnly={flag}")
