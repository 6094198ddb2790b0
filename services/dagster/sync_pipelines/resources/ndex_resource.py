# =============================================================================
# NDEx Resource - Registry Connections
# =============================================================================
# Provides NDEx REST clients for the source and target servers of a sync run.
# =============================================================================

from dagster import ConfigurableResource
from pydantic import Field

from netsync.models import NdexClientSettings, NdexServer
from netsync.registry import NdexClient

__all__ = ["NdexResource"]


class NdexResource(ConfigurableResource):
    """
    Dagster resource for one NDEx server.

    Configuration mirrors a plan file's server entry plus the HTTP settings
    of NdexClientSettings.

    Attributes:
        server_address: Base REST route (e.g., "http://public.ndexbio.org/rest")
        username: Account name used for authentication
        password: Account password
        timeout: Request timeout in seconds
        retry_attempts: Attempts for idempotent reads
    """

    server_address: str = Field(..., description="Base REST route of the server")
    username: str = Field(..., description="Account name")
    password: str = Field(..., description="Account password")
    timeout: float = Field(30.0, description="Request timeout (seconds)")
    retry_attempts: int = Field(3, description="Attempts for idempotent GETs")

    def get_client(self) -> NdexClient:
        """
        Create an NDEx client for this server.

        The caller owns the client and should close it (it is a context manager).

        Returns:
            Configured NdexClient
        """
        server = NdexServer(
            server_address=self.server_address,
            username=self.username,
            password=self.password,
        )
        settings = NdexClientSettings(
            NDEX_HTTP_TIMEOUT=self.timeout,
            NDEX_RETRY_ATTEMPTS=self.retry_attempts,
        )
        return NdexClient(server, settings)
