"""Sync command formatting."""

from __future__ import annotations

import argparse

from draftsync import DraftSyncConfig, RunReport
from draftsync.cli.progress.rich import RichSyncProgress


def format_sync_summary(report: RunReport, config: DraftSyncConfig) -> str:
    mode = "dry-run" if report.dry_run else "apply"
    lines = [
        "",
        f"draftsync - sync complete ({mode})",
        "",
        f"  Kind:      {config.kind}",
        f"  Catalog:   {config.base_url}",
        f"  Drafts:    {config.drafts_path}",
        "",
        f"  Processed: {report.processed}",
        f"  Created:   {report.created}",
        f"  Updated:   {report.updated}",
        f"  Unchanged: {report.unchanged}",
        f"  Failed:    {report.failed}",
    ]

    if report.unresolved_dependencies:
        lines.append(f"  Waiting:   {report.drafts_with_missing_references} (missing siblings)")
        for missing_key, dependents in sorted(report.unresolved_dependencies.items()):
            lines.append(f"    {missing_key} <- {', '.join(sorted(dependents))}")
    if report.created == 0 and report.updated == 0 and report.failed == 0:
        lines.append("  Status:    all resources up to date")

    lines.append("")
    lines.append(f"  {report.summary}")

    if report.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace) -> RunReport:
    import draftsync.cli as cli

    config = cli.load_config(args.config)

    if not args.verbose:
        with RichSyncProgress() as progress:
            ds = await cli.DraftSync.from_config(config, progress=progress)
            report = await ds.sync(dry_run=args.dry_run)
    else:
        ds = await cli.DraftSync.from_config(config)
        report = await ds.sync(dry_run=args.dry_run)

    print(cli._format_summary(report, config))
    return report


__all__ = ["format_sync_summary", "run_sync"]
