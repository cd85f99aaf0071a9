"""Re-exports the site pipeline: discovery, composition, rewriting and export."""

from portfolio.assets import copy_images, encode_filename, list_images, resolve_background
from portfolio.discovery import build_category, discover_categories, discover_content_nodes, discover_site
from portfolio.errors import (
    BackgroundConflictError,
    ExportWriteError,
    PathValidationError,
    SiteBuildError,
    TemplateError,
)
from portfolio.manifest_json import serialize_asset_list, serialize_categories
from portfolio.metadata import read_custom_title, read_links, read_subtitle, read_video_ids
from portfolio.models import (
    BackgroundPolicy,
    CategoryManifest,
    ContentNode,
    NodeKind,
    RenderMode,
    SiteManifest,
)
from portfolio.page_composer import compose_page, render_node, render_not_found
from portfolio.path_rewriter import apply_rewrites, build_rewrite_rules
from portfolio.site_paths import SiteConfig, resolve_site_config

__all__ = [
    "BackgroundConflictError",
    "BackgroundPolicy",
    "CategoryManifest",
    "ContentNode",
    "ExportWriteError",
    "NodeKind",
    "PathValidationError",
    "RenderMode",
    "SiteBuildError",
    "SiteConfig",
    "SiteManifest",
    "TemplateError",
    "apply_rewrites",
    "build_category",
    "build_rewrite_rules",
    "compose_page",
    "copy_images",
    "discover_categories",
    "discover_content_nodes",
    "discover_site",
    "encode_filename",
    "list_images",
    "read_custom_title",
    "read_links",
    "read_subtitle",
    "read_video_ids",
    "render_node",
    "render_not_found",
    "resolve_background",
    "resolve_site_config",
    "serialize_asset_list",
    "serialize_categories",
]
