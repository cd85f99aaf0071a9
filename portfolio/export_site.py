"""Export every page and asset into a static tree hosted under /<prefix>/."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

# Support direct execution: `python portfolio/export_site.py ...`
if __package__ in (None, ""):
    _REPO_ROOT = Path(__file__).resolve().parents[1]
    if str(_REPO_ROOT) not in sys.path:
        sys.path.insert(0, str(_REPO_ROOT))

from portfolio.assets import copy_images
from portfolio.discovery import BACKGROUND_DIR, IMAGES_DIR, discover_site
from portfolio.errors import ExportWriteError, SiteBuildError
from portfolio.logging_utils import setup_logging
from portfolio.models import RenderMode, SiteManifest
from portfolio.page_composer import render_node, render_not_found
from portfolio.path_rewriter import apply_rewrites, build_rewrite_rules, current_revision
from portfolio.site_paths import SiteConfig, load_config_module, resolve_site_config, route_output_path
from portfolio.verify_export import verify_export

logger = logging.getLogger(__name__)

NOT_FOUND_PAGE = "404.html"


@dataclass
class ExportReport:
    pages: list[Path]
    assets_copied: int = 0
    assets_failed: int = 0


def _write_page(path: Path, page: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(page, encoding="utf-8")
    except OSError as exc:
        raise ExportWriteError(f"Failed to write {path}: {exc}") from exc


def _copy_static(static_dir: Path, dest_dir: Path, stylesheet_path: Path) -> tuple[int, int]:
    if not stylesheet_path.is_file():
        logger.warning("Stylesheet not found: %s", stylesheet_path)
    if not static_dir.is_dir():
        return 0, 0
    try:
        shutil.copytree(static_dir, dest_dir, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        logger.warning("Failed to copy static files to %s: %s", dest_dir, exc)
        return 0, 1
    return sum(1 for p in static_dir.rglob("*") if p.is_file()), 0


def copy_site_assets(site: SiteManifest, config: SiteConfig, report: ExportReport) -> None:
    """Mirror image folders into the output tree; every failure here is non-fatal."""
    output_dir = config.output_dir
    folders: list[tuple[Path, Path]] = []
    for category in site.categories:
        source = config.category_root / category.key
        dest = output_dir / config.section / category.key
        folders.append((source / IMAGES_DIR, dest / IMAGES_DIR))
        if category.background:
            folders.append((source / BACKGROUND_DIR, dest / BACKGROUND_DIR))
    if site.feature.images:
        folders.append((config.feature_dir / IMAGES_DIR, output_dir / config.feature / IMAGES_DIR))

    for source, dest in folders:
        result = copy_images(source, dest)
        report.assets_copied += result.copied
        report.assets_failed += result.failed

    copied, failed = _copy_static(config.static_dir, output_dir / "static", config.stylesheet_path)
    report.assets_copied += copied
    report.assets_failed += failed


def export_site(config: SiteConfig, revision: str | None = None) -> ExportReport:
    """Render the whole site into config.output_dir.

    Raises SiteBuildError (background conflicts, unreadable templates,
    failed page writes). Files written before the failure are left in place.
    """
    site = discover_site(config, RenderMode.EXPORT)
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportWriteError(f"Failed to create output directory {config.output_dir}: {exc}") from exc

    rules = build_rewrite_rules(site, config, RenderMode.EXPORT, revision or current_revision(config.content_dir))
    report = ExportReport(pages=[])
    copy_site_assets(site, config, report)

    for route in site.routes():
        node = site.nodes[route]
        category = site.category(node.category_key) if node.is_category else None
        page = apply_rewrites(render_node(site, node, section=config.section, category=category), rules)
        out_path = route_output_path(config.output_dir, route)
        _write_page(out_path, page)
        report.pages.append(out_path)
        logger.info("Generated %s", out_path.relative_to(config.output_dir).as_posix())

    not_found = apply_rewrites(render_not_found(site, config.section), rules)
    out_path = config.output_dir / NOT_FOUND_PAGE
    _write_page(out_path, not_found)
    report.pages.append(out_path)
    return report


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export the portfolio as a static site.")
    parser.add_argument("--base-dir", help="Project root with templates/ and static/")
    parser.add_argument("--content-dir", help="Content root (default BASE_DIR/templates)")
    parser.add_argument("--output-dir", help="Output dir (default BASE_DIR/docs)")
    parser.add_argument("--prefix", help="Deploy sub-path, e.g. 'portfolio' for /portfolio/")
    parser.add_argument("--revision", help="Stylesheet cache-busting revision (default: git or 'dev')")
    parser.add_argument("--strict-links", action="store_true", help="Fail when exported links point nowhere")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def run_export(args: argparse.Namespace) -> int:
    config = resolve_site_config(
        base_dir=args.base_dir,
        content_dir=args.content_dir,
        output_dir=args.output_dir,
        prefix=args.prefix,
    )
    try:
        report = export_site(config, revision=args.revision)
    except SiteBuildError as exc:
        print(f"❌ Export failed: {exc}", file=sys.stderr)
        return 1

    issues = verify_export(config.output_dir, config.prefix)
    for issue in issues:
        logger.warning("%s: %s (%s)", issue.page.relative_to(config.output_dir), issue.url, issue.reason)

    print(f"✓ Generated {len(report.pages)} pages in {config.output_dir}")
    print(f"🖼️ {report.assets_copied} asset(s) copied, {report.assets_failed} failed")
    if issues and args.strict_links:
        print(f"❌ {len(issues)} broken or unprefixed link(s)", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv[1:])
    setup_logging(args.log_level or getattr(load_config_module(), "LOG_LEVEL", "INFO"))
    return run_export(args)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
