# =============================================================================
# Sync Plan Models Module
# =============================================================================
# Defines the plan file that configures one synchronization run:
# - NdexServer: Connection details for one registry
# - SyncOptions: Engine behavior switches
# - QueryCopyPlan / IdCopyPlan: Plan kinds (discriminated on planType)
# =============================================================================

import json
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "MAX_CANDIDATES",
    "NdexServer",
    "SyncOptions",
    "QueryCopyPlan",
    "IdCopyPlan",
    "SyncPlan",
    "load_plan",
    "parse_plan",
]


MAX_CANDIDATES = 100
"""Upper bound on target candidates (and query-selected sources) fetched per run."""


_PLAN_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class NdexServer(BaseModel):
    """
    Connection details for one NDEx server.

    Attributes:
        server_address: Base REST route (e.g., "http://public.ndexbio.org/rest")
        username: Account name used for authentication
        password: Account password
    """

    server_address: str = Field(..., description="Base REST route of the server")
    username: str = Field(..., description="Account name")
    password: str = Field(..., repr=False, description="Account password")

    model_config = _PLAN_CONFIG

    @field_validator("server_address")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base route so routes can be appended with '/'."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Server address must be an http(s) URL, got '{v}'")
        return v.rstrip("/")


class SyncOptions(BaseModel):
    """
    Switches read by the decision engine.

    Attributes:
        update_target_network: Select Update mode instead of Create-only mode
        update_read_only_network: Allow refreshing read-only targets in Update mode
        duplicate_stale_copies: In Create-only mode, answer a stale direct copy
            with a brand-new copy (the historical behavior). When False the stale
            copy is refreshed in place instead.
        candidate_limit: Maximum number of target candidates fetched
    """

    update_target_network: bool = False
    update_read_only_network: bool = False
    duplicate_stale_copies: bool = True
    candidate_limit: int = Field(MAX_CANDIDATES, ge=1, le=MAX_CANDIDATES)

    model_config = _PLAN_CONFIG


class _BasePlan(BaseModel):
    """Fields shared by every plan kind."""

    source: NdexServer
    target: NdexServer
    target_group_name: str | None = Field(
        None, description="Account whose networks are target candidates (defaults to target user)"
    )
    update_target_network: bool = False
    update_read_only_network: bool = False
    duplicate_stale_copies: bool = True

    model_config = _PLAN_CONFIG

    @property
    def candidate_owner(self) -> str:
        """Account that scopes target candidate discovery."""
        return self.target_group_name or self.target.username

    def to_options(self) -> SyncOptions:
        """Engine options carried by this plan."""
        return SyncOptions(
            update_target_network=self.update_target_network,
            update_read_only_network=self.update_read_only_network,
            duplicate_stale_copies=self.duplicate_stale_copies,
        )


class QueryCopyPlan(_BasePlan):
    """Plan whose source networks are selected by a text search on the source server."""

    plan_type: Literal["QueryCopyPlan"] = "QueryCopyPlan"
    search_string: str = Field("", description="Search text on the source server")
    source_account_name: str | None = Field(
        None, description="Restrict the search to networks owned by this account"
    )

    def source_selector(self):
        """Build the source-selection strategy for this plan."""
        from netsync.sync.sources import QuerySourceSelector

        return QuerySourceSelector(
            search_string=self.search_string,
            account_name=self.source_account_name,
        )


class IdCopyPlan(_BasePlan):
    """Plan whose source networks are an explicit list of network ids."""

    plan_type: Literal["IdCopyPlan"] = "IdCopyPlan"
    network_ids: list[str] = Field(..., min_length=1, description="Source network ids")

    @field_validator("network_ids")
    @classmethod
    def clean_ids(cls, v: list[str]) -> list[str]:
        """Trim ids, drop blanks and duplicates while preserving order."""
        cleaned = [i.strip() for i in v if isinstance(i, str) and i.strip()]
        unique = list(dict.fromkeys(cleaned))
        if not unique:
            raise ValueError("network_ids must contain at least one non-empty id")
        return unique

    def source_selector(self):
        """Build the source-selection strategy for this plan."""
        from netsync.sync.sources import IdSourceSelector

        return IdSourceSelector(network_ids=self.network_ids)


SyncPlan = Annotated[
    Union[QueryCopyPlan, IdCopyPlan],
    Field(discriminator="plan_type"),
]
"""Any plan kind, selected by its ``planType`` key."""

_plan_adapter: TypeAdapter = TypeAdapter(SyncPlan)


def parse_plan(data: dict) -> QueryCopyPlan | IdCopyPlan:
    """
    Validate a plan dictionary.

    Raises:
        pydantic.ValidationError: If the plan is malformed or its planType unknown
    """
    return _plan_adapter.validate_python(data)


def load_plan(path: str | Path) -> QueryCopyPlan | IdCopyPlan:
    """
    Read and validate a JSON plan file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If the plan is malformed
    """
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    return parse_plan(data)
