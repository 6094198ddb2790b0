"""Dagster Resources - External Service Connections."""

from .mongodb_resource import MongoDBResource
from .ndex_resource import NdexResource

__all__ = [
    "MongoDBResource",
    "NdexResource",
]
