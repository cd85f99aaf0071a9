from pathlib import Path

from portfolio import metadata


def test_subtitle_is_trimmed(tmp_path: Path):
    (tmp_path / "subtitle.txt").write_text("  Editorial & Beauty  \n", encoding="utf-8")

    assert metadata.read_subtitle(tmp_path, "fitness") == "Editorial & Beauty"
    assert metadata.read_custom_title(tmp_path) == "Editorial & Beauty"


def test_subtitle_defaults_when_missing(tmp_path: Path):
    assert metadata.read_subtitle(tmp_path, "headshots") == "Professional headshots photography"
    assert metadata.read_custom_title(tmp_path) == metadata.DEFAULT_CUSTOM_TITLE


def test_subtitle_directory_named_like_file_falls_back(tmp_path: Path):
    (tmp_path / "subtitle.txt").mkdir()

    assert metadata.read_subtitle(tmp_path, "x") == "Professional x photography"


def test_parse_links_splits_on_first_comma_and_skips_malformed():
    text = "Instagram, https://instagram.com/me \nno comma here\n\n  \nSite,https://example.com/a,b\n"

    assert metadata.parse_links(text) == {
        "Instagram": "https://instagram.com/me",
        "Site": "https://example.com/a,b",
    }


def test_parse_links_later_duplicates_overwrite():
    assert metadata.parse_links("a,1\na,2\n") == {"a": "2"}


def test_read_links_missing_file(tmp_path: Path):
    assert metadata.read_links(tmp_path) == {}


def test_read_links_from_images_dir(tmp_path: Path):
    (tmp_path / "Links.txt").write_text("Agency,https://agency.example\n", encoding="utf-8")

    assert metadata.read_links(tmp_path) == {"Agency": "https://agency.example"}


def test_parse_video_id_formats():
    assert metadata.parse_video_id("https://youtu.be/abc123?si=xyz") == "abc123"
    assert metadata.parse_video_id("https://youtu.be/abc123") == "abc123"
    assert metadata.parse_video_id("https://www.youtube.com/watch?v=def456&t=10s") == "def456"
    assert metadata.parse_video_id("https://youtube.com/watch?feature=share&v=ghi789") == "ghi789"
    assert metadata.parse_video_id("https://vimeo.com/12345") is None
    assert metadata.parse_video_id("") is None


def test_read_video_ids_skips_unknown_lines(tmp_path: Path):
    (tmp_path / "youtubeLinks.txt").write_text(
        "https://youtu.be/one\n\nnot a link\nhttps://youtube.com/watch?v=two&list=x\n",
        encoding="utf-8",
    )

    assert metadata.read_video_ids(tmp_path) == ["one", "two"]
    assert metadata.read_video_ids(tmp_path / "missing") == []


def test_invalid_utf8_is_replaced_not_fatal(tmp_path: Path):
    (tmp_path / "subtitle.txt").write_bytes(b"Caf\xe9 shots\n")

    assert metadata.read_subtitle(tmp_path, "x") == "Caf\ufffd shots"
