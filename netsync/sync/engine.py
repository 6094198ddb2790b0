# =============================================================================
# Sync Engine
# =============================================================================
# Runs one synchronization: select sources, read lineage on both registries,
# decide and execute one action per source network.
# =============================================================================

import logging
from datetime import datetime, timezone

from netsync.models import NdexClientSettings, Permission, SyncOptions, SyncReport
from netsync.provenance import AncestryExtractor, fetch_lineage
from netsync.registry import NdexClient, NetworkRegistry

from .context import RunContext
from .decision import decide
from .executor import SyncExecutor
from .sources import SourceSelector

__all__ = ["SyncEngine", "run_plan"]

logger = logging.getLogger(__name__)


class SyncEngine:
    """
    Synchronizes source networks onto a target registry.

    Per-network failures never stop the run; they are recorded in the
    returned SyncReport. Failures to enumerate sources or candidates do
    propagate, since there is nothing to reconcile without them.

    Args:
        source: Source registry
        target: Target registry
        selector: Strategy choosing the source networks
        candidate_owner: Account whose networks on the target are candidates
        options: Engine options (mode, read-only policy, candidate limit)
        extractor: Ancestry extractor used by the chain walker
        log: Logger to use (e.g. a Dagster context.log)
        executor: Executor override (defaults to SyncExecutor)
    """

    def __init__(
        self,
        source: NetworkRegistry,
        target: NetworkRegistry,
        selector: SourceSelector,
        candidate_owner: str,
        options: SyncOptions | None = None,
        *,
        extractor: AncestryExtractor | None = None,
        log=None,
        executor: SyncExecutor | None = None,
    ) -> None:
        self.source = source
        self.target = target
        self.selector = selector
        self.candidate_owner = candidate_owner
        self.options = options or SyncOptions()
        self.extractor = extractor
        self.log = log or logger
        self.executor = executor or SyncExecutor(source, target, log=self.log)

    def build_context(self) -> RunContext:
        """
        Read sources, candidates and their lineage into a RunContext.

        Networks whose provenance cannot be read are quarantined.
        """
        context = RunContext(options=self.options)

        sources = self.selector.find_source_networks(self.source, log=self.log)
        fetched = fetch_lineage(self.source, sources, role="source", log=self.log)
        context.sources = fetched.networks
        context.lineage.update(fetched.lineage)
        context.quarantined.extend(fetched.quarantined)

        candidates = self.target.list_candidates(
            self.candidate_owner,
            min_permission=Permission.ADMIN,
            limit=self.options.candidate_limit,
        )
        self.log.info(f"Found {len(candidates)} networks in target NDEx under {self.candidate_owner}")
        fetched = fetch_lineage(self.target, candidates, role="target", log=self.log)
        context.candidates = fetched.networks
        context.lineage.update(fetched.lineage)
        context.quarantined.extend(fetched.quarantined)

        return context

    def process(self) -> SyncReport:
        """Run the synchronization and return its report."""
        context = self.build_context()
        report = SyncReport(mode=context.mode, quarantined=list(context.quarantined))
        report.errors.extend(
            f"{q.role} {q.network_id}: provenance unavailable ({q.reason})" for q in context.quarantined
        )

        self.log.info(
            f"Synchronizing {len(context.sources)} source networks against "
            f"{len(context.candidates)} target candidates ({context.mode.value} mode)"
        )

        for source_network in context.sources:
            decision = decide(source_network, context, self.extractor, self.log)
            result = self.executor.execute(decision, source_network, context)
            report.results.append(result)
            report.errors.extend(f"{source_network.external_id}: {error}" for error in result.errors)

        report.completed_at = datetime.now(timezone.utc)
        self.log.info(f"Sync finished: {report.counts()} ({len(report.failed)} failed)")
        return report


def run_plan(
    plan,
    *,
    source: NetworkRegistry | None = None,
    target: NetworkRegistry | None = None,
    settings: NdexClientSettings | None = None,
    candidate_owner: str | None = None,
    log=None,
) -> SyncReport:
    """
    Execute a QueryCopyPlan or IdCopyPlan.

    Registries default to NDEx clients built from the plan's server entries
    and are closed afterwards; injected registries are left open.

    Args:
        candidate_owner: Account scoping target candidates (defaults to the
            plan's targetGroupName, then its target username). Pass the
            account the injected target registry authenticates as.
    """
    owned: list[NdexClient] = []
    if source is None:
        source = NdexClient(plan.source, settings)
        owned.append(source)
    if target is None:
        target = NdexClient(plan.target, settings)
        owned.append(target)

    try:
        engine = SyncEngine(
            source,
            target,
            plan.source_selector(),
            candidate_owner or plan.candidate_owner,
            plan.to_options(),
            log=log,
        )
        return engine.process()
    finally:
        for client in owned:
            client.close()
