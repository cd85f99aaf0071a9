"""Check an exported tree for root paths that escaped the prefix rewrite."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple
from urllib.parse import unquote

from bs4 import BeautifulSoup

LINK_ATTRS = ("href", "src")


class LinkIssue(NamedTuple):
    page: Path
    url: str
    reason: str


def _under_prefix(url: str, prefix: str) -> bool:
    if not prefix:
        return True
    root = f"/{prefix}"
    return url == root or url.startswith(root + "/")


def _target_exists(output_dir: Path, url: str, prefix: str) -> bool:
    clean = url.split("?", 1)[0].split("#", 1)[0]
    if prefix:
        clean = clean[len(prefix) + 1 :]
    rel = unquote(clean).lstrip("/")
    target = output_dir / rel if rel else output_dir
    if target.is_dir():
        return (target / "index.html").is_file()
    return target.is_file()


def iter_root_links(page_html: str):
    soup = BeautifulSoup(page_html, "html.parser")
    for tag in soup.find_all(True):
        for attr in LINK_ATTRS:
            value = tag.get(attr)
            if isinstance(value, str) and value.startswith("/") and not value.startswith("//"):
                yield value


def verify_export(output_dir: Path, prefix: str) -> list[LinkIssue]:
    """Return every root-relative href/src that is unprefixed or points nowhere."""
    issues: list[LinkIssue] = []
    prefix = prefix.strip("/")
    for page in sorted(output_dir.rglob("*.html")):
        text = page.read_text(encoding="utf-8", errors="replace")
        for url in iter_root_links(text):
            if not _under_prefix(url, prefix):
                issues.append(LinkIssue(page, url, "not rewritten to the deploy prefix"))
            elif not _target_exists(output_dir, url, prefix):
                issues.append(LinkIssue(page, url, "target missing from export"))
    return issues
