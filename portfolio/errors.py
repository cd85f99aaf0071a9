"""Exceptions raised while discovering, rendering and exporting the site."""

from __future__ import annotations

from pathlib import Path


class SiteBuildError(Exception):
    """Fatal condition that aborts a discovery pass or an export run."""


class BackgroundConflictError(SiteBuildError):
    def __init__(self, directory: Path, matches: list[str]):
        self.directory = directory
        self.matches = sorted(matches)
        listing = ", ".join(self.matches)
        super().__init__(
            f"Multiple background images in {directory}: {listing}. "
            "Keep exactly one image in the Background folder."
        )


class TemplateError(SiteBuildError):
    """Raised when a required template (base layout or page fragment) cannot be read."""


class ExportWriteError(SiteBuildError):
    """Raised when a required output file or directory cannot be written."""


class PathValidationError(ValueError):
    """Raised when a request path is invalid or unsafe."""
