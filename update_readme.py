#!/usr/bin/env python3
"""
update_readme — regenerate README.md's server table from the catalog.

Groups in servers/index.json are flattened: their members are listed as
ordinary rows where the group sits.  Servers whose server.json fails to
load are reported and omitted.  README.md is overwritten unconditionally.

Usage:
    python3 update_readme.py
"""

import argparse
import os
import sys

from mcp_catalog.catalog import CatalogError, load_catalog
from mcp_catalog.readme import render_readme


_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
_SERVERS_DIR = os.path.join(_SCRIPT_DIR, "servers")
_README_PATH = os.path.join(_SCRIPT_DIR, "README.md")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Regenerate README.md from the server catalog"
    )
    parser.add_argument(
        "--servers-dir", default=_SERVERS_DIR,
        help="Catalog directory (default: servers/ next to this script)",
    )
    parser.add_argument(
        "--output", default=_README_PATH,
        help="README path (default: README.md next to this script)",
    )
    args = parser.parse_args()

    try:
        report = load_catalog(args.servers_dir, prompt_links=True)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for server_id, reason in report.skipped():
        print(f"warning: failed to read config for {server_id}: {reason}", file=sys.stderr)

    records = report.records()
    try:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(render_readme(records))
    except OSError as e:
        print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"README.md updated with {len(records)} servers")


if __name__ == "__main__":
    main()
