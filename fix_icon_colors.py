#!/usr/bin/env python3
"""
fix_icon_colors — make catalog icons theme-adaptive.

Rewrites hard-coded fill/stroke colors in every servers/<id>/icon.svg to
currentColor so icons follow the surrounding text color in light and dark
mode.  Files are rewritten in place, only when something changed.  Safe
to re-run.

Usage:
    python3 fix_icon_colors.py
    python3 fix_icon_colors.py --servers-dir path/to/servers --dry-run
"""

import argparse
import os
import sys

from mcp_catalog.icons import fix_catalog_icons


_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
_SERVERS_DIR = os.path.join(_SCRIPT_DIR, "servers")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Replace hard-coded icon colors with currentColor"
    )
    parser.add_argument(
        "--servers-dir", default=_SERVERS_DIR,
        help="Catalog directory (default: servers/ next to this script)",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Report icons that would change without writing them",
    )
    args = parser.parse_args()

    if not os.path.isdir(args.servers_dir):
        print(f"Error: not a directory: {args.servers_dir}", file=sys.stderr)
        sys.exit(1)

    try:
        report = fix_catalog_icons(args.servers_dir, dry_run=args.dry_run)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for server_id in report.not_svg:
        print(f"warning: {server_id}/icon.svg is not SVG markup, skipped", file=sys.stderr)

    verb = "Would fix" if args.dry_run else "Fixed"
    print(f"\n{verb} {len(report.fixed)} icons")


if __name__ == "__main__":
    main()
