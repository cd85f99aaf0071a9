"""Serialize manifests into JSON blobs embedded in page scripts."""

from __future__ import annotations

import json
from typing import Any, Iterable

from portfolio.models import CategoryManifest


def _clean(value: str) -> str:
    """Drop carriage returns and collapse newlines so the blob stays on one line."""
    return value.replace("\r", "").replace("\n", " ")


def _dumps(payload: Any) -> str:
    text = json.dumps(payload, ensure_ascii=False)
    # A literal "</script>" inside a string would end the enclosing script tag.
    return text.replace("</", "<\\/")


def category_payload(category: CategoryManifest) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "title": _clean(category.title),
        "subtitle": _clean(category.subtitle),
        "images": [_clean(image) for image in category.images],
        "links": {_clean(name): _clean(url) for name, url in category.links.items()},
    }
    if category.background:
        entry["background"] = _clean(category.background)
    return entry


def serialize_categories(categories: Iterable[CategoryManifest]) -> str:
    """One object keyed by category key, in key order."""
    payload = {category.key: category_payload(category) for category in sorted(categories, key=lambda c: c.key)}
    return _dumps(payload)


def serialize_asset_list(urls: Iterable[str]) -> str:
    return _dumps([_clean(url) for url in urls])
