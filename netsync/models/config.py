# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides Pydantic Settings models for process-level configuration:
# - NdexClientSettings: HTTP behavior of the NDEx REST client
# - MongoSettings: MongoDB sync ledger configuration
# =============================================================================

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

__all__ = [
    "NdexClientSettings",
    "MongoSettings",
]


# =============================================================================
# NDEx Client Settings
# =============================================================================

class NdexClientSettings(BaseSettings):
    """
    HTTP behavior shared by every NDEx client in the process.

    Maps environment variables with prefix "NDEX_":
    - NDEX_HTTP_TIMEOUT → timeout
    - NDEX_RETRY_ATTEMPTS → retry_attempts
    - NDEX_USER_AGENT → user_agent

    Attributes:
        timeout: Per-request timeout in seconds (default: 30)
        retry_attempts: Attempts for idempotent reads (default: 3)
        user_agent: User-Agent header sent with every request
    """

    timeout: float = Field(30.0, gt=0, validation_alias="NDEX_HTTP_TIMEOUT", description="Request timeout (seconds)")
    retry_attempts: int = Field(3, ge=1, validation_alias="NDEX_RETRY_ATTEMPTS", description="Attempts for idempotent GETs")
    user_agent: str = Field("netsync/0.1.0", validation_alias="NDEX_USER_AGENT", description="User-Agent header")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )


# =============================================================================
# MongoDB Settings (Sync Ledger)
# =============================================================================

class MongoSettings(BaseSettings):
    """
    Configuration for MongoDB (sync run ledger).

    Maps environment variables with prefix "MONGO_":
    - MONGO_HOST → host
    - MONGO_PORT → port
    - MONGO_INITDB_ROOT_USERNAME → username
    - MONGO_INITDB_ROOT_PASSWORD → password
    - MONGO_DATABASE → database
    - MONGO_AUTH_SOURCE → auth_source

    Attributes:
        host: MongoDB host (default: "mongodb")
        port: MongoDB port (default: 27017)
        username: MongoDB username (maps from MONGO_INITDB_ROOT_USERNAME)
        password: MongoDB password (maps from MONGO_INITDB_ROOT_PASSWORD)
        database: Database name (default: "netsync")
        auth_source: Authentication source (default: "admin")
    """

    host: str = Field("mongodb", validation_alias="MONGO_HOST", description="MongoDB host")
    port: int = Field(27017, validation_alias="MONGO_PORT", description="MongoDB port")
    username: str = Field(..., validation_alias="MONGO_INITDB_ROOT_USERNAME", description="MongoDB username (maps from MONGO_INITDB_ROOT_USERNAME)")
    password: str = Field(..., validation_alias="MONGO_INITDB_ROOT_PASSWORD", description="MongoDB password (maps from MONGO_INITDB_ROOT_PASSWORD)")
    database: str = Field("netsync", validation_alias="MONGO_DATABASE", description="Database name")
    auth_source: str = Field("admin", validation_alias="MONGO_AUTH_SOURCE", description="Authentication source")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )

    @property
    def connection_string(self) -> str:
        """
        Build MongoDB connection URI.

        Format: mongodb://[username]:[password]@[host]:[port]/[database]?authSource=[auth_source]

        Returns:
            MongoDB connection URI string
        """
        return (
            f"mongodb://{self.username}:{self.password}@"
            f"{self.host}:{self.port}/{self.database}?authSource={self.auth_source}"
        )
