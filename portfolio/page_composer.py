"""Compose final HTML by literal placeholder substitution into the base layout."""

from __future__ import annotations

import html
import re
from typing import Mapping

from portfolio.manifest_json import serialize_asset_list, serialize_categories
from portfolio.metadata import DEFAULT_CUSTOM_TITLE
from portfolio.models import CategoryManifest, ContentNode, SiteManifest, title_from_key

PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")

GRADIENT_BACKGROUND = "background: linear-gradient(45deg, #ff6b9d, #c44faf, #8b5fbf, #6b73ff);"
GRADIENT_ANIMATION = (
    "background-size: 400% 400%;",
    "animation: gradientShift 15s ease infinite;",
)

NOT_FOUND_TITLE = "404 - Page Not Found"
NOT_FOUND_BODY = (
    "<div style='text-align: center; padding: 50px;'>\n"
    "    <h1>404 - Page Not Found</h1>\n"
    "    <p>The page you're looking for doesn't exist.</p>\n"
    "    <a href='/'>Return to Home</a>\n"
    "</div>"
)

NAV_INDENT = " " * 20
YOUTUBE_EMBED = (
    '<div class="video-container">'
    '<iframe src="https://www.youtube.com/embed/{id}" title="YouTube video player" frameborder="0" '
    'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" '
    "allowfullscreen loading=\"lazy\"></iframe></div>"
)


def substitute(text: str, values: Mapping[str, str]) -> str:
    """Replace {{NAME}} tokens found in values; unknown tokens stay verbatim.

    One left-to-right pass: text coming from a value is never scanned again.
    """
    return PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), text)


def navigation_items(site: SiteManifest, section: str) -> str:
    lines = [
        f'{NAV_INDENT}<a href="/{section}/{key}/">{html.escape(title_from_key(key))}</a>'
        for key in site.navigation_keys()
    ]
    return "\n".join(lines)


def youtube_embeds(video_ids: tuple[str, ...] | list[str]) -> str:
    return "\n".join(YOUTUBE_EMBED.format(id=html.escape(video_id, quote=True)) for video_id in video_ids)


def apply_background(page: str, background_url: str) -> str:
    """Swap the animated gradient for a fixed image background."""
    page = page.replace(
        GRADIENT_BACKGROUND,
        f"background: url('{background_url}') center center/cover no-repeat fixed;",
    )
    for declaration in GRADIENT_ANIMATION:
        page = page.replace(declaration, "")
    return page


def site_values(site: SiteManifest, section: str) -> dict[str, str]:
    """Placeholder values shared by every page of the site."""
    return {
        "NAVIGATION_ITEMS": navigation_items(site, section),
        "CATEGORIES_JSON": serialize_categories(site.categories),
        "YOUTUBE_EMBEDS": youtube_embeds(site.feature.video_ids),
        "BTS_IMAGES_JSON": serialize_asset_list(site.feature.images),
        "BTS_SUBTITLE": site.feature.subtitle,
    }


def category_values(category: CategoryManifest | None) -> dict[str, str]:
    if category is None:
        return {"IMAGE_PATHS": "[]", "CUSTOM_TITLE": DEFAULT_CUSTOM_TITLE}
    return {
        "IMAGE_PATHS": serialize_asset_list(category.images),
        "CUSTOM_TITLE": category.custom_title,
    }


def compose_page(layout: str, title: str, content: str, values: Mapping[str, str]) -> str:
    body = substitute(content, {**values, "TITLE": title})
    return substitute(layout, {**values, "TITLE": title, "CONTENT": body})


def render_node(
    site: SiteManifest,
    node: ContentNode,
    *,
    section: str,
    category: CategoryManifest | None = None,
) -> str:
    """Render a content node; category pages take their (possibly fresh) manifest."""
    values = site_values(site, section)
    if node.is_category:
        values.update(category_values(category))

    page = compose_page(site.layout, node.title, node.body, values)
    if node.is_category and category is not None and category.background:
        page = apply_background(page, category.background)
    return page


def render_not_found(site: SiteManifest, section: str) -> str:
    return compose_page(site.layout, NOT_FOUND_TITLE, NOT_FOUND_BODY, site_values(site, section))
