#!/usr/bin/env python3
"""
Build or serve the portfolio site.

Usage:
    python build_site.py export [--prefix NAME] [--output-dir DIR] [--revision REV]
    python build_site.py serve [--host HOST] [--port PORT]

Notes:
- `serve` renders pages on every request from templates/; a category with
  several Background images uses the first one.
- `export` writes docs/ for hosting under /<prefix>/ and fails when a
  category has more than one Background image.
"""
import argparse
import sys

from portfolio import export_site, live_server
from portfolio.logging_utils import setup_logging
from portfolio.site_paths import load_config_module


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Portfolio site: live development server or static export.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--base-dir", help="Project root with templates/ and static/")
    common.add_argument("--content-dir", help="Content root (default BASE_DIR/templates)")
    common.add_argument("--log-level", default=None)

    sub = p.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", parents=[common], help="Write the static site")
    export.add_argument("--output-dir", help="Output dir (default BASE_DIR/docs)")
    export.add_argument("--prefix", help="Deploy sub-path, e.g. 'portfolio' for /portfolio/")
    export.add_argument("--revision", help="Stylesheet cache-busting revision")
    export.add_argument("--strict-links", action="store_true",
                        help="Fail when exported links point nowhere")

    serve = sub.add_parser("serve", parents=[common], help="Run the development server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level or getattr(load_config_module(), "LOG_LEVEL", "INFO"))

    if args.command == "export":
        return export_site.run_export(args)
    return live_server.run_server(args)


if __name__ == "__main__":
    sys.exit(main())
