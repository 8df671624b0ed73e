"""
CLI entry point for dapp.

Subcommands: features (which capabilities are usable in this environment)
and paths (the XDG directories an application would use). Both render a Rich
table by default, or JSON with --json.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import structlog
from rich.console import Console
from rich.table import Table

from dapp.errors import DappError
from dapp.features import feature_table
from dapp.path.xdg import BaseDirectories

logger = structlog.get_logger(__name__)


def _cmd_features(as_json: bool) -> int:
    rows = feature_table()
    if as_json:
        print(json.dumps(rows, indent=2))
        return 0

    table = Table(title="dapp features", show_header=True, header_style="bold")
    table.add_column("Feature", style="cyan")
    table.add_column("Requires", style="dim")
    table.add_column("Default", justify="center")
    table.add_column("Enabled", justify="center")
    table.add_column("Missing / extra")
    for row in rows:
        hint = row["missing"] or ""
        if row["missing"] and row["extra"]:
            hint += f" (pip install 'dapp[{row['extra']}]')"
        table.add_row(
            str(row["feature"]),
            ", ".join(row["requires"]) or "-",  # type: ignore[arg-type]
            "yes" if row["default"] else "",
            "[green]yes[/green]" if row["enabled"] else "[red]no[/red]",
            hint,
        )
    Console().print(table)
    return 0


def _cmd_paths(app_name: str, as_json: bool) -> int:
    dirs = BaseDirectories(app_name).as_dict()
    if as_json:
        print(json.dumps(dirs, indent=2))
        return 0

    table = Table(title=f"XDG directories for {app_name}", show_header=True, header_style="bold")
    table.add_column("Kind", style="cyan")
    table.add_column("Path")
    for kind, value in dirs.items():
        if isinstance(value, list):
            value = "\n".join(value) or "-"
        table.add_row(kind, value if value is not None else "-")
    Console().print(table)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI args and dispatch to subcommands. Returns 0 on success, 1 on failure."""
    parser = argparse.ArgumentParser(
        prog="dapp",
        description="Inspect dapp features and XDG paths.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    feat_p = subparsers.add_parser("features", help="Show which features are enabled.")
    feat_p.add_argument("--json", action="store_true", help="Print JSON instead of a table.")

    paths_p = subparsers.add_parser("paths", help="Show the XDG directories for an application.")
    paths_p.add_argument("app_name", help="Application name used as the directory prefix.")
    paths_p.add_argument("--json", action="store_true", help="Print JSON instead of a table.")

    args = parser.parse_args(argv)
    try:
        if args.command == "features":
            return _cmd_features(args.json)
        return _cmd_paths(args.app_name, args.json)
    except DappError as e:
        logger.error("dapp_command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
