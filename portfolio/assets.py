"""Image discovery, background resolution and best-effort image copying."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import NamedTuple
from urllib.parse import quote

from portfolio.errors import BackgroundConflictError
from portfolio.models import BackgroundPolicy

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg")


class CopyResult(NamedTuple):
    copied: int
    failed: int


def is_image_name(name: str) -> bool:
    """Exact, case-sensitive match on the extension token ('a.PNG' is not an image)."""
    stem, dot, ext = name.rpartition(".")
    return bool(dot and stem) and ext in IMAGE_EXTENSIONS


def encode_filename(name: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(name, safe="")


def _image_entries(directory: Path) -> list[str]:
    """Image filenames in directory-listing order; [] when missing or unreadable."""
    if not directory.is_dir():
        return []
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries if entry.is_file() and is_image_name(entry.name)]
    except OSError as exc:
        logger.warning("Could not read image directory %s: %s", directory, exc)
        return []


def list_images(directory: Path, url_base: str) -> list[str]:
    """Return sorted asset URLs ('<url_base>/<encoded name>') for the images in directory.

    The sort is plain lexicographic on the final URL, so '10.png' comes
    before '2.png'.
    """
    base = url_base.rstrip("/")
    urls = [f"{base}/{encode_filename(name)}" for name in _image_entries(directory)]
    urls.sort()
    return urls


def resolve_background(
    directory: Path,
    url_base: str,
    policy: BackgroundPolicy = BackgroundPolicy.STRICT,
) -> str | None:
    """Resolve the single background image of a category.

    Returns None when the folder is missing or has no images. With several
    images, STRICT raises BackgroundConflictError and LENIENT keeps the first
    one in directory-listing order.
    """
    matches = _image_entries(directory)
    if not matches:
        return None
    if len(matches) > 1 and policy is BackgroundPolicy.STRICT:
        raise BackgroundConflictError(directory, matches)
    if len(matches) > 1:
        logger.debug("Several background images in %s, using %s", directory, matches[0])
    return f"{url_base.rstrip('/')}/{encode_filename(matches[0])}"


def copy_images(source_dir: Path, dest_dir: Path) -> CopyResult:
    """Copy image files from source_dir to dest_dir; failures are logged and skipped."""
    names = _image_entries(source_dir)
    if not names:
        return CopyResult(0, 0)

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Failed to create directory %s: %s", dest_dir, exc)
        return CopyResult(0, len(names))

    copied = failed = 0
    for name in sorted(names):
        try:
            shutil.copy2(source_dir / name, dest_dir / name)
        except OSError as exc:
            logger.warning("Failed to copy %s to %s: %s", source_dir / name, dest_dir / name, exc)
            failed += 1
            continue
        logger.debug("Copied image %s", name)
        copied += 1
    return CopyResult(copied, failed)
