"""Scan the content tree into an immutable SiteManifest.

Two walks feed the manifest:

- page fragments (``*.html``) become ContentNodes keyed by route;
- every ``<section>/<key>/`` folder with an ``images`` directory becomes a
  CategoryManifest, combining the asset scanner and the metadata reader.

Discovery runs once per server start or export run. Under the STRICT
background policy a conflict in any category aborts the whole pass.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from portfolio.assets import list_images, resolve_background
from portfolio.errors import TemplateError
from portfolio.metadata import (
    DEFAULT_FEATURE_SUBTITLE,
    read_custom_title,
    read_links,
    read_subtitle,
    read_video_ids,
)
from portfolio.models import (
    BackgroundPolicy,
    CategoryManifest,
    ContentNode,
    FeatureContent,
    NodeKind,
    RenderMode,
    SiteManifest,
    title_from_key,
)
from portfolio.site_paths import TEMPLATES_MOUNT, SiteConfig

logger = logging.getLogger(__name__)

IMAGES_DIR = "images"
BACKGROUND_DIR = "Background"
SKIPPED_DIRS = {IMAGES_DIR, BACKGROUND_DIR}
LAYOUT_STEM = "base"
HOME_STEM = "index"

URL_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9._~-]+$")


def is_url_safe_key(key: str) -> bool:
    return bool(URL_SAFE_KEY_RE.match(key)) and key not in (".", "..")


def asset_url_root(config: SiteConfig, mode: RenderMode, folder: str) -> str:
    """URL prefix for assets below content_dir/<folder>.

    Live pages point at the /templates mount; exported pages point at the
    copies made under output_dir/<folder> (prefixed later by the rewriter).
    """
    if mode is RenderMode.LIVE:
        return f"{TEMPLATES_MOUNT}/{folder}"
    return f"/{folder}"


def load_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"Could not read template {path}: {exc}") from exc


def _node_for(rel_dir: tuple[str, ...], stem: str, body: str, section: str) -> ContentNode | None:
    if not rel_dir:
        return ContentNode(route=f"/{stem}/", title=title_from_key(stem), body=body)

    if rel_dir[0] == section:
        key = "/".join(rel_dir[1:]) if len(rel_dir) > 1 else stem
        if not all(is_url_safe_key(part) for part in key.split("/")):
            logger.warning("Skipping %s page with unsafe name: %s", section, key)
            return None
        return ContentNode(
            route=f"/{section}/{key}/",
            title=title_from_key(key) or "Portfolio",
            body=body,
            kind=NodeKind.CATEGORY_MEMBER,
            category_key=key,
        )

    return ContentNode(route="/" + "/".join(rel_dir) + "/", title=title_from_key(stem), body=body)


def _scan_pages(directory: Path, rel_dir: tuple[str, ...], section: str, nodes: dict[str, ContentNode]) -> None:
    for path in sorted(directory.iterdir()):
        if path.name.startswith("."):
            continue
        if path.is_dir():
            if path.name in SKIPPED_DIRS:
                continue
            _scan_pages(path, rel_dir + (path.name,), section, nodes)
            continue
        if path.suffix != ".html":
            continue
        if path.stem == LAYOUT_STEM or (path.stem == HOME_STEM and not rel_dir):
            continue

        node = _node_for(rel_dir, path.stem, load_template(path), section)
        if node is None:
            continue
        if node.route in nodes:
            logger.warning("Route %s already defined, ignoring %s", node.route, path)
            continue
        nodes[node.route] = node


def discover_content_nodes(content_dir: Path, section: str = "modeling") -> dict[str, ContentNode]:
    """Map every page fragment under content_dir to its route."""
    nodes: dict[str, ContentNode] = {}
    if not content_dir.is_dir():
        return nodes

    home = content_dir / f"{HOME_STEM}.html"
    if home.is_file():
        nodes["/"] = ContentNode(route="/", title="Home", body=load_template(home))
    else:
        logger.warning("Home page template not found: %s", home)

    _scan_pages(content_dir, (), section, nodes)
    return nodes


def build_category(
    category_dir: Path,
    url_root: str,
    policy: BackgroundPolicy = BackgroundPolicy.STRICT,
) -> CategoryManifest | None:
    """Build one category manifest, or None when it has no images."""
    key = category_dir.name
    images_dir = category_dir / IMAGES_DIR
    if not images_dir.is_dir():
        return None

    category_url = f"{url_root.rstrip('/')}/{key}"
    images = list_images(images_dir, f"{category_url}/{IMAGES_DIR}")
    if not images:
        logger.debug("Skipping category %s: no images", key)
        return None

    return CategoryManifest(
        key=key,
        title=title_from_key(key),
        subtitle=read_subtitle(category_dir, key),
        custom_title=read_custom_title(category_dir),
        images=tuple(images),
        links=read_links(images_dir),
        background=resolve_background(category_dir / BACKGROUND_DIR, f"{category_url}/{BACKGROUND_DIR}", policy),
    )


def discover_categories(
    category_root: Path,
    url_root: str,
    policy: BackgroundPolicy = BackgroundPolicy.STRICT,
) -> list[CategoryManifest]:
    """Return the manifests of every category folder with images, sorted by key."""
    if not category_root.is_dir():
        return []

    categories: list[CategoryManifest] = []
    for category_dir in sorted(p for p in category_root.iterdir() if p.is_dir()):
        if category_dir.name.startswith("."):
            continue
        if not is_url_safe_key(category_dir.name):
            logger.warning("Skipping category with unsafe name: %s", category_dir.name)
            continue
        manifest = build_category(category_dir, url_root, policy)
        if manifest is not None:
            categories.append(manifest)

    categories.sort(key=lambda c: c.key)
    return categories


def read_feature(feature_dir: Path, url_root: str) -> FeatureContent:
    return FeatureContent(
        subtitle=read_custom_title(feature_dir, default=DEFAULT_FEATURE_SUBTITLE),
        images=tuple(list_images(feature_dir / IMAGES_DIR, f"{url_root.rstrip('/')}/{IMAGES_DIR}")),
        video_ids=tuple(read_video_ids(feature_dir)),
    )


def discover_site(config: SiteConfig, mode: RenderMode) -> SiteManifest:
    """Run a full discovery pass; the background policy follows the render mode."""
    policy = BackgroundPolicy.STRICT if mode is RenderMode.EXPORT else BackgroundPolicy.LENIENT
    layout = load_template(config.base_layout)
    nodes = discover_content_nodes(config.content_dir, config.section)
    categories = discover_categories(
        config.category_root,
        asset_url_root(config, mode, config.section),
        policy,
    )
    feature = read_feature(config.feature_dir, asset_url_root(config, mode, config.feature))
    logger.info("Discovered %d pages and %d categories in %s", len(nodes), len(categories), config.content_dir)
    return SiteManifest(layout=layout, nodes=nodes, categories=tuple(categories), feature=feature)
