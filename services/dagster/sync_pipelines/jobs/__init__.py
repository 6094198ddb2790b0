"""Dagster Jobs - Executable Workflows."""

from .sync_job import sync_networks_job

__all__ = ["sync_networks_job"]
