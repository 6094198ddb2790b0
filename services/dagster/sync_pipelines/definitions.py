"""Dagster Definitions - Repository Configuration.

Defines the job, schedule and resources of the NDEx network sync pipeline.
"""

from dagster import Definitions, EnvVar

from .jobs import sync_networks_job
from .resources import MongoDBResource, NdexResource
from .schedules import nightly_sync_schedule


# =============================================================================
# Definitions
# =============================================================================

defs = Definitions(
    jobs=[sync_networks_job],
    resources={
        "source_ndex": NdexResource(
            server_address=EnvVar("SOURCE_NDEX_ADDRESS"),
            username=EnvVar("SOURCE_NDEX_USERNAME"),
            password=EnvVar("SOURCE_NDEX_PASSWORD"),
        ),
        "target_ndex": NdexResource(
            server_address=EnvVar("TARGET_NDEX_ADDRESS"),
            username=EnvVar("TARGET_NDEX_USERNAME"),
            password=EnvVar("TARGET_NDEX_PASSWORD"),
        ),
        "mongodb": MongoDBResource(
            connection_string=EnvVar("MONGO_CONNECTION_STRING"),
            database="netsync",
        ),
    },
    schedules=[nightly_sync_schedule],
)
