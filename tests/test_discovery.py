import logging
from pathlib import Path

import pytest

from conftest import write_images
from portfolio import discovery
from portfolio.errors import BackgroundConflictError, TemplateError
from portfolio.models import BackgroundPolicy, NodeKind, RenderMode, title_from_key


def test_title_from_key_touches_only_first_character():
    assert title_from_key("fitness") == "Fitness"
    assert title_from_key("eDITORIAL shots") == "EDITORIAL shots"
    assert title_from_key("ébène") == "Ébène"
    assert title_from_key("") == ""


def test_content_nodes_routes_and_kinds(site_config):
    nodes = discovery.discover_content_nodes(site_config.content_dir, "modeling")

    assert sorted(nodes) == ["/", "/bio/", "/modeling/", "/modeling/fitness/", "/modeling/headshots/"]
    assert nodes["/"].title == "Home"
    assert nodes["/bio/"].title == "Bio"
    assert nodes["/bio/"].kind is NodeKind.STANDALONE
    fitness = nodes["/modeling/fitness/"]
    assert fitness.kind is NodeKind.CATEGORY_MEMBER
    assert fitness.category_key == "fitness"
    assert fitness.title == "Fitness"


def test_content_nodes_skip_layout_and_asset_folders(site_config):
    (site_config.content_dir / "modeling" / "fitness" / "images" / "stray.html").write_text("x", encoding="utf-8")
    (site_config.content_dir / "contact").mkdir()
    (site_config.content_dir / "contact" / "form.html").write_text("<form></form>", encoding="utf-8")

    nodes = discovery.discover_content_nodes(site_config.content_dir, "modeling")

    assert "/base/" not in nodes
    assert all("stray" not in node.body for node in nodes.values())
    assert nodes["/contact/"].title == "Form"
    assert nodes["/contact/"].kind is NodeKind.STANDALONE


def test_unreadable_fragment_is_a_template_error(site_config):
    (site_config.content_dir / "broken.html").write_bytes(b"\xff\xfe bad")

    with pytest.raises(TemplateError):
        discovery.discover_content_nodes(site_config.content_dir, "modeling")


def test_categories_sorted_and_populated(site_config):
    categories = discovery.discover_categories(site_config.category_root, "/templates/modeling")

    assert [c.key for c in categories] == ["fitness", "headshots"]
    fitness, headshots = categories
    assert fitness.title == "Fitness"
    assert fitness.subtitle == "Editorial & Beauty"
    assert fitness.images == (
        "/templates/modeling/fitness/images/gym%201.png",
        "/templates/modeling/fitness/images/run%2B2.jpg",
    )
    assert fitness.links == {"Instagram": "https://instagram.com/me", "Site": "https://example.com/a,b"}
    assert fitness.background == "/templates/modeling/fitness/Background/bg.png"
    assert headshots.subtitle == "Professional headshots photography"
    assert headshots.background is None
    assert len(headshots.images) == 3


def test_category_without_images_dir_is_excluded(site_config):
    lonely = site_config.category_root / "editorial"
    write_images(lonely / "Background", "bg.png")
    (lonely / "subtitle.txt").write_text("Editorial", encoding="utf-8")

    keys = [c.key for c in discovery.discover_categories(site_config.category_root, "/m")]

    assert "editorial" not in keys


def test_category_with_empty_images_dir_is_excluded(site_config):
    (site_config.category_root / "empty" / "images").mkdir(parents=True)

    keys = [c.key for c in discovery.discover_categories(site_config.category_root, "/m")]

    assert "empty" not in keys


def test_strict_conflict_aborts_whole_discovery(site_config):
    write_images(site_config.category_root / "headshots" / "Background", "bg1.png", "bg2.png")

    with pytest.raises(BackgroundConflictError) as excinfo:
        discovery.discover_categories(site_config.category_root, "/m", BackgroundPolicy.STRICT)
    assert "bg1.png" in str(excinfo.value) and "bg2.png" in str(excinfo.value)

    lenient = discovery.discover_categories(site_config.category_root, "/m", BackgroundPolicy.LENIENT)
    headshots = [c for c in lenient if c.key == "headshots"][0]
    assert headshots.background in ("/m/headshots/Background/bg1.png", "/m/headshots/Background/bg2.png")


def test_discover_site_url_roots_follow_mode(site_config):
    live = discovery.discover_site(site_config, RenderMode.LIVE)
    export = discovery.discover_site(site_config, RenderMode.EXPORT)

    assert live.category("fitness").images[0].startswith("/templates/modeling/fitness/images/")
    assert export.category("fitness").images[0].startswith("/modeling/fitness/images/")
    assert live.navigation_keys() == ["fitness", "headshots"]


def test_discover_site_requires_base_layout(site_config):
    (site_config.content_dir / "base.html").unlink()

    with pytest.raises(TemplateError):
        discovery.discover_site(site_config, RenderMode.EXPORT)


def test_feature_folder_is_read(site_config):
    feature = site_config.feature_dir
    write_images(feature / "images", "set.jpg")
    (feature / "youtubeLinks.txt").write_text("https://youtu.be/vid1\n", encoding="utf-8")
    (feature / "subtitle.txt").write_text("On set\n", encoding="utf-8")

    site = discovery.discover_site(site_config, RenderMode.EXPORT)

    assert site.feature.images == ("/behind-the-scenes/images/set.jpg",)
    assert site.feature.video_ids == ("vid1",)
    assert site.feature.subtitle == "On set"


def test_unsafe_category_names_are_skipped(site_config):
    write_images(site_config.category_root / "bad name" / "images", "a.png")

    keys = [c.key for c in discovery.discover_categories(site_config.category_root, "/m")]

    assert "bad name" not in keys
    assert discovery.is_url_safe_key("a-b_c.d~e")
    assert not discovery.is_url_safe_key("..")


def test_missing_content_root_yields_nothing(tmp_path: Path):
    assert discovery.discover_content_nodes(tmp_path / "missing") == {}
    assert discovery.discover_categories(tmp_path / "missing", "/m") == []


def test_missing_home_fragment_is_logged(site_config, caplog):
    (site_config.content_dir / "index.html").unlink()

    with caplog.at_level(logging.WARNING, logger="portfolio.discovery"):
        nodes = discovery.discover_content_nodes(site_config.content_dir, "modeling")

    assert "/" not in nodes
    assert "Home page template not found" in caplog.text
