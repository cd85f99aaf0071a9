"""Optional per-category text files: subtitle, links and video links."""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

SUBTITLE_FILE = "subtitle.txt"
LINKS_FILE = "Links.txt"
VIDEO_LINKS_FILE = "youtubeLinks.txt"

DEFAULT_CUSTOM_TITLE = "Professional portrait photography for actors, models, and business professionals"
DEFAULT_FEATURE_SUBTITLE = "A look behind the camera: sets, lighting and the people who make each shoot happen"

SHORT_VIDEO_RE = re.compile(r"youtu\.be/([^?\s]+)")
WATCH_VIDEO_RE = re.compile(r"youtube\.com/watch\S*?[?&]v=([^&\s]+)")


def default_subtitle(key: str) -> str:
    return f"Professional {key} photography"


def _read_optional_text(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return None


def read_subtitle(category_dir: Path, key: str) -> str:
    text = _read_optional_text(category_dir / SUBTITLE_FILE)
    return text.strip() if text is not None else default_subtitle(key)


def read_custom_title(category_dir: Path, default: str = DEFAULT_CUSTOM_TITLE) -> str:
    """Long-form line shown as {{CUSTOM_TITLE}} on category pages."""
    text = _read_optional_text(category_dir / SUBTITLE_FILE)
    return text.strip() if text is not None else default


def parse_links(text: str) -> dict[str, str]:
    """Parse 'name,url' lines; the first comma splits, lines without one are skipped."""
    links: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        name, sep, url = line.partition(",")
        if not sep:
            continue
        links[name.strip()] = url.strip()
    return links


def read_links(images_dir: Path) -> dict[str, str]:
    text = _read_optional_text(images_dir / LINKS_FILE)
    return parse_links(text) if text is not None else {}


def parse_video_id(line: str) -> str | None:
    """Extract the id from a youtu.be/<id> or youtube.com/watch?v=<id> link."""
    match = SHORT_VIDEO_RE.search(line)
    if match:
        return match.group(1)
    match = WATCH_VIDEO_RE.search(line)
    if match:
        return match.group(1)
    return None


def parse_video_ids(text: str) -> list[str]:
    ids: list[str] = []
    for line in text.splitlines():
        video_id = parse_video_id(line.strip())
        if video_id:
            ids.append(video_id)
    return ids


def read_video_ids(feature_dir: Path) -> list[str]:
    text = _read_optional_text(feature_dir / VIDEO_LINKS_FILE)
    return parse_video_ids(text) if text is not None else []
