"""Mode-specific rewriting of root paths in composed pages.

Live pages are served from "/", so nothing changes. Exported pages are
hosted below "/<prefix>/": every navigation link and asset root the pages
contain is listed explicitly and rewritten by plain substring replacement.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path

from portfolio.discovery import IMAGES_DIR, BACKGROUND_DIR
from portfolio.models import RenderMode, SiteManifest
from portfolio.site_paths import STATIC_MOUNT, SiteConfig

logger = logging.getLogger(__name__)

Rule = tuple[str, str]

QUOTES = ('"', "'")
ASSET_DELIMITERS = ('"', "'", "(")
DEV_REVISION = "dev"


def current_revision(repo_dir: Path | None = None) -> str:
    """Short source revision used to bust the stylesheet cache."""
    explicit = os.getenv("PORTFOLIO_REVISION")
    if explicit:
        return explicit.strip()
    github_sha = os.getenv("GITHUB_SHA")
    if github_sha:
        return github_sha.strip()[:7]
    try:
        out = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
            cwd=str(repo_dir) if repo_dir else None,
        ).stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return DEV_REVISION
    return out or DEV_REVISION


def _link_rules(route: str, prefix: str) -> list[Rule]:
    return [(f"href={q}{route}{q}", f"href={q}{prefix}{route}{q}") for q in QUOTES]


def _asset_rules(root: str, prefix: str) -> list[Rule]:
    return [(f"{d}{root}", f"{d}{prefix}{root}") for d in ASSET_DELIMITERS]


def build_rewrite_rules(
    site: SiteManifest,
    config: SiteConfig,
    mode: RenderMode,
    revision: str = DEV_REVISION,
) -> list[Rule]:
    """Enumerate the (old, new) substring pairs for one render mode."""
    if mode is RenderMode.LIVE:
        return []

    prefix = f"/{config.prefix}" if config.prefix else ""
    rules: list[Rule] = []

    routes = set(site.routes())
    routes.update(f"/{config.section}/{key}/" for key in site.navigation_keys())
    routes.update(f"/{config.section}/{category.key}/" for category in site.categories)
    for route in sorted(routes):
        rules.extend(_link_rules(route, prefix))

    # The section root also covers links assembled in page scripts, e.g. "/modeling/" + key.
    asset_roots = [f"/{config.feature}/{IMAGES_DIR}/", f"{STATIC_MOUNT}/", f"/{config.section}/"]
    for category in site.categories:
        asset_roots.append(f"/{config.section}/{category.key}/{IMAGES_DIR}/")
        asset_roots.append(f"/{config.section}/{category.key}/{BACKGROUND_DIR}/")
    for root in asset_roots:
        rules.extend(_asset_rules(root, prefix))

    stylesheet = config.stylesheet_url
    for q in QUOTES:
        rules.append((f"href={q}{stylesheet}{q}", f"href={q}{prefix}{stylesheet}?v={revision}{q}"))

    return rules


def apply_rewrites(page: str, rules: list[Rule]) -> str:
    """Replace every old substring in one left-to-right pass, longest match first.

    Replacement text is never rescanned, so '/a/' -> '/p/a/' cannot cascade.
    """
    if not rules:
        return page
    table = dict(rules)
    pattern = re.compile("|".join(re.escape(old) for old in sorted(table, key=len, reverse=True)))
    return pattern.sub(lambda m: table[m.group(0)], page)
