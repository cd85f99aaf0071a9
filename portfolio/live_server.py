#!/usr/bin/env python3
"""Development server that renders portfolio pages on each request.

Features:
- Renders discovered pages on demand (no output cache)
- Re-reads a category's images and metadata on every request to its page
- Serves the content tree under /templates/, the stylesheet under /static/
  and the last export under /docs/
- Answers unknown routes with the composed 404 page
"""

from __future__ import annotations

import argparse
import logging
import mimetypes
import sys
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import urlparse

# Support direct execution: `python portfolio/live_server.py ...`
if __package__ in (None, ""):
    _REPO_ROOT = Path(__file__).resolve().parents[1]
    if str(_REPO_ROOT) not in sys.path:
        sys.path.insert(0, str(_REPO_ROOT))

from portfolio.discovery import asset_url_root, build_category, discover_site
from portfolio.errors import PathValidationError, SiteBuildError
from portfolio.logging_utils import setup_logging
from portfolio.models import BackgroundPolicy, CategoryManifest, RenderMode, SiteManifest
from portfolio.page_composer import render_node, render_not_found
from portfolio.site_paths import (
    SiteConfig,
    load_config_module,
    normalize_route,
    resolve_mounted_file,
    resolve_site_config,
    static_mounts,
)

logger = logging.getLogger(__name__)


class PortfolioApp:
    def __init__(self, config: SiteConfig, site: SiteManifest):
        self.config = config
        self.site = site

    @classmethod
    def discover(cls, config: SiteConfig) -> "PortfolioApp":
        return cls(config, discover_site(config, RenderMode.LIVE))

    def _fresh_category(self, key: str) -> CategoryManifest | None:
        return build_category(
            self.config.category_root / key,
            asset_url_root(self.config, RenderMode.LIVE, self.config.section),
            BackgroundPolicy.LENIENT,
        )

    def not_found(self) -> tuple[int, str]:
        return HTTPStatus.NOT_FOUND, render_not_found(self.site, self.config.section)

    def render(self, request_path: str) -> tuple[int, str]:
        try:
            route = normalize_route(request_path)
        except PathValidationError:
            return self.not_found()

        node = self.site.node_for(route)
        if node is None:
            return self.not_found()

        category = self._fresh_category(node.category_key) if node.is_category else None  # type: ignore[arg-type]
        return HTTPStatus.OK, render_node(self.site, node, section=self.config.section, category=category)

    def redirect_target(self, request_path: str) -> str | None:
        """'/bio' -> '/bio/' when the slashed route exists."""
        if request_path.endswith("/"):
            return None
        try:
            route = normalize_route(request_path)
        except PathValidationError:
            return None
        return route if route in self.site.nodes else None

    def resolve_static(self, request_path: str) -> tuple[bool, Path | None]:
        """Return (is_mounted, file) for a path below one of the static mounts."""
        for mount, root in static_mounts(self.config).items():
            if request_path.startswith(mount + "/"):
                return True, resolve_mounted_file(root, request_path[len(mount) + 1 :])
        return False, None


def _send_html(handler: BaseHTTPRequestHandler, status: int, page: str) -> None:
    body = page.encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "text/html; charset=utf-8")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


def _send_file(handler: BaseHTTPRequestHandler, path: Path) -> None:
    data = path.read_bytes()
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    handler.send_response(HTTPStatus.OK)
    handler.send_header("Content-Type", content_type)
    handler.send_header("Content-Length", str(len(data)))
    handler.end_headers()
    handler.wfile.write(data)


def make_handler(app: PortfolioApp):
    class PortfolioHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # type: ignore[override]
            path = urlparse(self.path).path
            try:
                mounted, static_file = app.resolve_static(path)
                if mounted:
                    if static_file is not None:
                        _send_file(self, static_file)
                    else:
                        _send_html(self, *app.not_found())
                    return

                location = app.redirect_target(path)
                if location is not None:
                    self.send_response(302)
                    self.send_header("Location", location)
                    self.end_headers()
                    return

                status, page = app.render(path)
                if status == HTTPStatus.NOT_FOUND:
                    logger.debug("404 %s", path)
                _send_html(self, status, page)
            except Exception:
                logger.exception("Failed to serve %s", path)
                _send_html(self, *app.not_found())

        def log_message(self, format: str, *args: object) -> None:  # type: ignore[override]
            return

    return PortfolioHandler


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the portfolio development server.")
    parser.add_argument("--base-dir", help="Project root with templates/ and static/")
    parser.add_argument("--content-dir", help="Content root (default BASE_DIR/templates)")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def _print_routes(app: PortfolioApp, host: str, port: int) -> None:
    print("Discovered pages:")
    for route in app.site.routes():
        node = app.site.nodes[route]
        print(f"  - {route} ({node.kind.value}) - {node.title}")
    print(f"\nServer running on http://{host}:{port}")


def run_server(args: argparse.Namespace) -> int:
    cfg = load_config_module()
    host = args.host or getattr(cfg, "HOST", "127.0.0.1")
    port = args.port if args.port is not None else getattr(cfg, "PORT", 3000)
    site_config = resolve_site_config(base_dir=args.base_dir, content_dir=args.content_dir)
    try:
        app = PortfolioApp.discover(site_config)
    except SiteBuildError as exc:
        print(f"❌ Could not discover content: {exc}", file=sys.stderr)
        return 1

    with ThreadingHTTPServer((host, port), make_handler(app)) as server:
        _print_routes(app, host, port)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("Shutting down server.")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv[1:])
    setup_logging(args.log_level or getattr(load_config_module(), "LOG_LEVEL", "INFO"))
    return run_server(args)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
