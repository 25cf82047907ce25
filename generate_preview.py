#!/usr/bin/env python3
"""
generate_preview — render the catalog as an HTML page, light and dark
mode side by side, for eyeballing icons and descriptions.

Reads servers/index.json and each servers/<id>/server.json; writes
scratchpad/preview.html (overwritten each run).  Entries that fail to
load are reported and left out.

Usage:
    python3 generate_preview.py
    python3 generate_preview.py --output /tmp/preview.html
"""

import argparse
import os
import sys

from mcp_catalog.catalog import CatalogError, load_catalog
from mcp_catalog.preview import render_preview


_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
_SERVERS_DIR = os.path.join(_SCRIPT_DIR, "servers")
_OUTPUT_PATH = os.path.join(_SCRIPT_DIR, "scratchpad", "preview.html")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate an HTML preview of the server catalog"
    )
    parser.add_argument(
        "--servers-dir", default=_SERVERS_DIR,
        help="Catalog directory (default: servers/ next to this script)",
    )
    parser.add_argument(
        "--output", default=_OUTPUT_PATH,
        help="Output HTML path (default: scratchpad/preview.html)",
    )
    args = parser.parse_args()

    try:
        report = load_catalog(args.servers_dir)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for server_id, reason in report.skipped():
        print(f"warning: skipping {server_id}: {reason}", file=sys.stderr)

    out_path = os.path.abspath(args.output)
    out_dir = os.path.dirname(out_path)
    icon_root = os.path.relpath(os.path.abspath(args.servers_dir), out_dir).replace(os.sep, "/")
    html = render_preview(report, icon_root)

    try:
        os.makedirs(out_dir, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(html)
    except OSError as e:
        print(f"Error: cannot write {out_path}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Generated {out_path}")


if __name__ == "__main__":
    main()
