"""Immutable values produced by a discovery pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    STANDALONE = "standalone"
    CATEGORY_MEMBER = "category-member"


class RenderMode(str, Enum):
    LIVE = "live"
    EXPORT = "export"


class BackgroundPolicy(str, Enum):
    """STRICT fails on several background images, LENIENT picks the first one."""

    STRICT = "strict"
    LENIENT = "lenient"


def title_from_key(key: str) -> str:
    """Upper-case the first character only: 'fitness' -> 'Fitness', 'eDITORIAL' -> 'EDITORIAL'."""
    if not key:
        return key
    return key[0].upper() + key[1:]


@dataclass(frozen=True)
class ContentNode:
    route: str
    title: str
    body: str
    kind: NodeKind = NodeKind.STANDALONE
    category_key: str | None = None

    @property
    def is_category(self) -> bool:
        return self.kind is NodeKind.CATEGORY_MEMBER and self.category_key is not None


@dataclass(frozen=True)
class CategoryManifest:
    key: str
    title: str
    subtitle: str
    custom_title: str
    images: tuple[str, ...] = ()
    links: dict[str, str] = field(default_factory=dict)
    background: str | None = None


@dataclass(frozen=True)
class FeatureContent:
    """Behind-the-scenes gallery and video list shared by every page."""

    subtitle: str
    images: tuple[str, ...] = ()
    video_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class SiteManifest:
    layout: str
    nodes: dict[str, ContentNode]
    categories: tuple[CategoryManifest, ...] = ()
    feature: FeatureContent = field(default_factory=lambda: FeatureContent(subtitle=""))

    def node_for(self, route: str) -> ContentNode | None:
        return self.nodes.get(route)

    def category(self, key: str) -> CategoryManifest | None:
        for category in self.categories:
            if category.key == key:
                return category
        return None

    def navigation_keys(self) -> list[str]:
        return sorted({node.category_key for node in self.nodes.values() if node.is_category})  # type: ignore[misc]

    def routes(self) -> list[str]:
        return sorted(self.nodes)
