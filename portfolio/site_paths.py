"""Shared path helpers for the content tree, the live routes and the export tree."""

from __future__ import annotations

import importlib.util
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from urllib.parse import unquote

from portfolio.errors import PathValidationError

BASE_DIR_ENV = "PORTFOLIO_BASE_DIR"
CONTENT_DIR_ENV = "PORTFOLIO_CONTENT_DIR"
OUTPUT_DIR_ENV = "PORTFOLIO_OUTPUT_DIR"
STATIC_DIR_ENV = "PORTFOLIO_STATIC_DIR"

TEMPLATES_MOUNT = "/templates"
STATIC_MOUNT = "/static"
DOCS_MOUNT = "/docs"


@dataclass(frozen=True)
class SiteConfig:
    """Resolved locations and naming for one run."""

    content_dir: Path
    static_dir: Path
    output_dir: Path
    prefix: str = "portfolio"
    section: str = "modeling"
    feature: str = "behind-the-scenes"
    stylesheet: str = "style.css"

    @property
    def base_layout(self) -> Path:
        return self.content_dir / "base.html"

    @property
    def category_root(self) -> Path:
        return self.content_dir / self.section

    @property
    def feature_dir(self) -> Path:
        return self.content_dir / self.feature

    @property
    def stylesheet_path(self) -> Path:
        return self.static_dir / self.stylesheet

    @property
    def stylesheet_url(self) -> str:
        return f"{STATIC_MOUNT}/{self.stylesheet}"


def load_config_module() -> ModuleType | None:
    try:
        import config  # local import to keep tests isolated

        return config
    except Exception:
        pass

    try:
        repo_root = Path(__file__).resolve().parents[1]
        config_path = repo_root / "config.py"
        if not config_path.is_file():
            return None
        spec = importlib.util.spec_from_file_location("portfolio_config", config_path)
        module = importlib.util.module_from_spec(spec)  # type: ignore[arg-type]
        assert spec and spec.loader
        spec.loader.exec_module(module)  # type: ignore[union-attr]
        return module
    except Exception:
        return None


def resolve_base_dir(cli_base_dir: str | None = None) -> Path:
    """Resolve the project root with priority: CLI -> env -> config.py."""
    if cli_base_dir:
        return Path(cli_base_dir).expanduser()

    env_value = os.getenv(BASE_DIR_ENV)
    if env_value:
        return Path(env_value).expanduser()

    module = load_config_module()
    value = getattr(module, "BASE_DIR", None) if module else None
    if value is None:
        raise RuntimeError("Could not resolve BASE_DIR")
    return Path(value).expanduser()


def resolve_site_config(
    *,
    base_dir: str | None = None,
    content_dir: str | None = None,
    output_dir: str | None = None,
    prefix: str | None = None,
) -> SiteConfig:
    """Build a SiteConfig; explicit arguments win over env, env over config.py."""
    base = resolve_base_dir(base_dir)
    module = load_config_module()

    def _pick(cli_value: str | None, env_name: str, default: Path) -> Path:
        if cli_value:
            return Path(cli_value).expanduser()
        env_value = os.getenv(env_name)
        if env_value:
            return Path(env_value).expanduser()
        return default

    def _default(name: str, fallback: Path) -> Path:
        # An explicit base dir (CLI or env) relocates every default beneath it.
        if base_dir or os.getenv(BASE_DIR_ENV) or module is None:
            return fallback
        value = getattr(module, name, None)
        return Path(value) if value else fallback

    content_default = _default("CONTENT_DIR", base / "templates")
    static_default = _default("STATIC_DIR", base / "static")
    output_default = _default("OUTPUT_DIR", base / "docs")

    return SiteConfig(
        content_dir=_pick(content_dir, CONTENT_DIR_ENV, content_default),
        static_dir=_pick(None, STATIC_DIR_ENV, static_default),
        output_dir=_pick(output_dir, OUTPUT_DIR_ENV, output_default),
        prefix=(prefix or getattr(module, "DEPLOY_PREFIX", "portfolio")).strip("/"),
        section=getattr(module, "CATEGORY_SECTION", "modeling"),
        feature=getattr(module, "FEATURE_DIR", "behind-the-scenes"),
        stylesheet=getattr(module, "STYLESHEET", "style.css"),
    )


def normalize_route(request_path: str) -> str:
    """Normalize a request path into a canonical '/a/b/' route."""
    value = unquote((request_path or "").split("?", 1)[0].split("#", 1)[0])
    value = value.replace("\\", "/").strip()
    if value in ("", "/"):
        return "/"

    if ".." in value.split("/"):
        raise PathValidationError("Path traversal is not allowed")
    normalized = posixpath.normpath("/" + value.lstrip("/"))
    if normalized == "/":
        return "/"
    return normalized.rstrip("/") + "/"


def resolve_mounted_file(root: Path, rel_encoded: str) -> Path | None:
    """Resolve a URL-encoded path below a static mount root, rejecting traversal."""
    rel = unquote(rel_encoded).replace("\\", "/").lstrip("/")
    if not rel:
        return None
    normalized = posixpath.normpath(rel)
    if normalized in (".", "..") or normalized.startswith("../"):
        return None

    base = root.resolve()
    target = (base / Path(normalized)).resolve()
    if not str(target).startswith(str(base) + os.sep):
        return None
    return target if target.is_file() else None


def static_mounts(config: SiteConfig) -> dict[str, Path]:
    """Return the live server's static mounts: URL prefix -> directory."""
    return {
        TEMPLATES_MOUNT: config.content_dir,
        STATIC_MOUNT: config.static_dir,
        DOCS_MOUNT: config.output_dir,
    }


def route_output_path(output_dir: Path, route: str) -> Path:
    """Map '/' to index.html and '/a/b/' to a/b/index.html under output_dir."""
    rel = route.strip("/")
    if not rel:
        return output_dir / "index.html"
    return output_dir.joinpath(*rel.split("/")) / "index.html"
