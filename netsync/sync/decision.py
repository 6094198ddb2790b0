# =============================================================================
# Sync Decision Engine
# =============================================================================
# Chooses one action (create / update / update read-only / skip) for each
# source network by inspecting the lineage of every target candidate.
# =============================================================================

"""
Sync decisions.

Two modes are selected once per run:

Create-only mode (default)
    A direct copy at least as new as the source's last modification settles
    it and nothing is done. If only stale direct copies exist, the historical
    behavior is to create another copy rather than refresh the stale one;
    that duplication is kept behind ``SyncOptions.duplicate_stale_copies``.
    Turning the flag off refreshes the first stale copy instead.

Update mode
    The first direct copy is compared using the later of the source's
    modification time and its latest provenance event, against the earlier of
    the candidate's modification time and its copy event. A current copy is
    skipped, a stale one is refreshed (read-only copies only when allowed).
    A candidate that derives from the source but was modified afterwards is
    never overwritten and suppresses the create fallback.

If no candidate settles a source, a new copy is created. Candidates are
evaluated in registry order and the first definitive one wins.
"""

import logging
from datetime import datetime

from netsync.models import NetworkSummary, SyncAction, SyncDecision, SyncMode
from netsync.provenance import AncestryExtractor, ChainMatch, Lineage, walk_chain

from .context import RunContext

__all__ = ["decide", "decide_create_only", "decide_update"]

logger = logging.getLogger(__name__)


def _refresh(
    source: NetworkSummary,
    candidate: NetworkSummary,
    context: RunContext,
    log,
    *,
    needs_update: bool = False,
) -> SyncDecision:
    """Decide how to refresh a stale direct copy, honoring read-only policy."""
    if candidate.is_read_only and not context.options.update_read_only_network:
        log.warning(
            f"Target network {candidate.external_id} is a stale copy of {source.external_id} "
            f"but is read-only and updateReadOnlyNetwork is false. Not updating target."
        )
        return SyncDecision(
            source_id=source.external_id,
            action=SyncAction.SKIP,
            target_id=candidate.external_id,
            reason="stale copy is read-only and read-only updates are disabled",
            needs_update=needs_update,
        )

    action = SyncAction.UPDATE_READ_ONLY if candidate.is_read_only else SyncAction.UPDATE
    return SyncDecision(
        source_id=source.external_id,
        action=action,
        target_id=candidate.external_id,
        reason="stale direct copy",
        needs_update=needs_update,
    )


def _create(source: NetworkSummary, reason: str, *, needs_update: bool = False) -> SyncDecision:
    return SyncDecision(
        source_id=source.external_id,
        action=SyncAction.CREATE,
        reason=reason,
        needs_update=needs_update,
    )


def _match(
    candidate: NetworkSummary,
    source: NetworkSummary,
    context: RunContext,
    extractor: AncestryExtractor | None,
    log,
) -> ChainMatch:
    root = context.provenance_of(candidate.external_id)
    if root is None:
        log.info(f"No provenance history for target {candidate.external_id}")
    match = walk_chain(root, source.external_id, extractor)
    log.debug(f"Target {candidate.external_id} vs source {source.external_id}: {match.lineage.value} ({match.reason})")
    return match


def decide_create_only(
    source: NetworkSummary,
    context: RunContext,
    extractor: AncestryExtractor | None = None,
    log=None,
) -> SyncDecision:
    """
    Decide the action for ``source`` in Create-only mode.

    Returns:
        SKIP when a current direct copy exists, otherwise CREATE (or, when a
        stale copy exists and duplicate_stale_copies is off, a refresh)
    """
    log = log or logger
    log.info(f"Processing source network {source}; last modified {source.modification_time}")

    stale: NetworkSummary | None = None

    for candidate in context.candidates:
        match = _match(candidate, source, context, extractor, log)
        if not match.is_direct_copy:
            continue

        log.info(f"Found direct copy {candidate.external_id} of source network {source.external_id}")
        ended_at = match.ended_at
        if ended_at is not None and source.modification_time <= ended_at:
            log.info("We have a target that is an existing copy, but it does not need update, therefore not copying.")
            return SyncDecision(
                source_id=source.external_id,
                action=SyncAction.SKIP,
                target_id=candidate.external_id,
                reason="current direct copy exists",
            )

        log.info("Source modification is after target copy event, therefore needs update")
        if stale is None:
            stale = candidate

    if stale is None:
        log.info("No target that is a copy of the source found, will therefore copy the network")
        return _create(source, "no current copy on target")

    if context.options.duplicate_stale_copies:
        log.warning(
            f"Direct copy {stale.external_id} of {source.external_id} needs update, "
            "but refreshing in Create-only mode is disabled, so making another copy."
        )
        return _create(source, "stale direct copy duplicated", needs_update=True)
    return _refresh(source, stale, context, log, needs_update=True)


def _latest_source_time(source: NetworkSummary, context: RunContext) -> datetime:
    event_end = context.last_event_end(source.external_id)
    if event_end is None:
        return source.modification_time
    return max(source.modification_time, event_end)


def _earliest_target_time(candidate: NetworkSummary, match: ChainMatch) -> datetime:
    if match.ended_at is None:
        return candidate.modification_time
    return min(candidate.modification_time, match.ended_at)


def decide_update(
    source: NetworkSummary,
    context: RunContext,
    extractor: AncestryExtractor | None = None,
    log=None,
) -> SyncDecision:
    """
    Decide the action for ``source`` in Update mode.

    Returns:
        SKIP for a current (or protected) copy or a modified descendant,
        UPDATE / UPDATE_READ_ONLY for a stale copy, otherwise CREATE
    """
    log = log or logger
    log.info(
        f"Trying to update target network created from source {source}; "
        f"source last modified {source.modification_time}"
    )

    descendant: NetworkSummary | None = None
    latest_source = _latest_source_time(source, context)

    for candidate in context.candidates:
        match = _match(candidate, source, context, extractor, log)

        if match.lineage == Lineage.DERIVED_BUT_MODIFIED:
            log.info(
                f"Target {candidate.external_id} was copied from {source.external_id} and modified "
                "afterwards; it will not be overwritten"
            )
            if descendant is None:
                descendant = candidate
            continue

        if not match.is_direct_copy:
            continue

        earliest_target = _earliest_target_time(candidate, match)
        if latest_source < earliest_target:
            log.info(
                f"latestSourceDate = {latest_source}; earliestTargetDate = {earliest_target}. "
                "Not updating target."
            )
            return SyncDecision(
                source_id=source.external_id,
                action=SyncAction.SKIP,
                target_id=candidate.external_id,
                reason="direct copy is current",
            )

        return _refresh(source, candidate, context, log)

    if descendant is not None:
        return SyncDecision(
            source_id=source.external_id,
            action=SyncAction.SKIP,
            target_id=descendant.external_id,
            reason="modified descendant exists on target",
        )

    log.info("No target that is a copy of the source found, will therefore copy the network")
    return _create(source, "no copy on target")


def decide(
    source: NetworkSummary,
    context: RunContext,
    extractor: AncestryExtractor | None = None,
    log=None,
) -> SyncDecision:
    """Decide the action for ``source`` using the run's mode."""
    if context.mode == SyncMode.UPDATE:
        return decide_update(source, context, extractor, log)
    return decide_create_only(source, context, extractor, log)
