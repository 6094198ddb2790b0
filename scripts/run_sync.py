#!/usr/bin/env python
"""
Run one sync plan without Dagster.

Usage:
    python scripts/run_sync.py --plan plans/copy_by_query.json
    python scripts/run_sync.py --plan plans/copy_by_ids.json -v

Reads the plan file, connects to the source and target NDEx servers named
in it, and prints one line per source network. HTTP behavior comes from
NDEX_* environment variables (see NdexClientSettings).

Exit code is 0 when every source network was reconciled, 1 otherwise.
"""

import argparse
import logging
import sys

from netsync.models import NdexClientSettings, SyncReport, load_plan
from netsync.registry import RegistryError
from netsync.sync import run_plan


def print_report(report: SyncReport) -> None:
    """Print a human-readable summary of a run."""
    print(f"Mode: {report.mode.value}")
    for result in report.results:
        decision = result.decision
        target = result.result_target_id or decision.target_id or "-"
        status = "ok" if result.succeeded else "FAILED"
        print(f"  {decision.source_id} -> {decision.action.value} [{target}] {status}: {decision.reason}")
    for quarantined in report.quarantined:
        print(f"  quarantined {quarantined.role} {quarantined.network_id}: {quarantined.reason}")
    print(f"Counts: {report.counts()}")
    for error in report.errors:
        print(f"Error: {error}", file=sys.stderr)


def main() -> int:
    """
    CLI entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Synchronize NDEx networks using a plan file")
    parser.add_argument("--plan", required=True, help="Path of the JSON plan file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        plan = load_plan(args.plan)
    except (OSError, ValueError) as e:
        # ValidationError and JSONDecodeError are both ValueErrors
        print(f"Invalid plan {args.plan}: {e}", file=sys.stderr)
        return 1

    try:
        report = run_plan(plan, settings=NdexClientSettings())
    except RegistryError as e:
        print(f"Sync failed: {e}", file=sys.stderr)
        return 1

    print_report(report)
    return 1 if report.failed or report.quarantined else 0


if __name__ == "__main__":
    sys.exit(main())
