"""Network registries: the abstract interface and the NDEx REST client."""

from .base import NetworkRegistry, RegistryError
from .ndex_client import NdexClient

__all__ = ["NetworkRegistry", "RegistryError", "NdexClient"]
