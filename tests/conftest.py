import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path for absolute imports.
REPO_ROOT = Path(__file__).resolve().parents[1]
repo_root_str = str(REPO_ROOT)
if repo_root_str not in sys.path:
    sys.path.insert(0, repo_root_str)

from portfolio.site_paths import SiteConfig  # noqa: E402

BASE_HTML = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{TITLE}}</title>
<link rel="stylesheet" href="/static/style.css">
<style>
body {
    background: linear-gradient(45deg, #ff6b9d, #c44faf, #8b5fbf, #6b73ff);
    background-size: 400% 400%;
    animation: gradientShift 15s ease infinite;
}
</style>
</head>
<body>
<nav>
    <a href="/">Home</a>
    <a href="/bio/">Bio</a>
    <div class="dropdown">
{{NAVIGATION_ITEMS}}
    </div>
</nav>
<main>
{{CONTENT}}
</main>
</body>
</html>
"""

CATEGORY_BODY = """<h1>{{TITLE}}</h1>
<p class="lead">{{CUSTOM_TITLE}}</p>
<script>const images = {{IMAGE_PATHS}};</script>
"""

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def write_images(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(PNG_BYTES)


def make_content_tree(base: Path) -> Path:
    """headshots: 3 images, no background. fitness: 2 images, 1 background."""
    content = base / "templates"
    content.mkdir(parents=True)
    (content / "base.html").write_text(BASE_HTML, encoding="utf-8")
    (content / "index.html").write_text("<h1>Welcome</h1>", encoding="utf-8")
    (content / "bio.html").write_text("<h1>About me</h1>", encoding="utf-8")
    (content / "modeling.html").write_text(
        "<script>const categories = {{CATEGORIES_JSON}};</script>", encoding="utf-8"
    )

    headshots = content / "modeling" / "headshots"
    write_images(headshots / "images", "1.png", "2.jpg", "3.jpeg")
    (headshots / "headshots.html").write_text(CATEGORY_BODY, encoding="utf-8")

    fitness = content / "modeling" / "fitness"
    write_images(fitness / "images", "gym 1.png", "run+2.jpg")
    write_images(fitness / "Background", "bg.png")
    (fitness / "subtitle.txt").write_text("  Editorial & Beauty  \n", encoding="utf-8")
    (fitness / "images" / "Links.txt").write_text(
        "Instagram, https://instagram.com/me\nno comma here\n\nSite,https://example.com/a,b\n",
        encoding="utf-8",
    )
    (fitness / "fitness.html").write_text(CATEGORY_BODY, encoding="utf-8")

    static = base / "static"
    static.mkdir()
    (static / "style.css").write_text("body { color: #222; }\n", encoding="utf-8")
    return content


def make_config(base: Path, prefix: str = "portfolio") -> SiteConfig:
    return SiteConfig(
        content_dir=base / "templates",
        static_dir=base / "static",
        output_dir=base / "docs",
        prefix=prefix,
    )


@pytest.fixture
def site_base(tmp_path: Path) -> Path:
    base = tmp_path / "site"
    make_content_tree(base)
    return base


@pytest.fixture
def site_config(site_base: Path) -> SiteConfig:
    return make_config(site_base)
