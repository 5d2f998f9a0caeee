"""Tests for OG meta, card request and manifest rendering."""

import datetime
import json
from pathlib import Path

from og_extract.config import SiteConfig
from og_extract.core.types import PagePreview
from og_extract.output.renderer import (
    build_card_request,
    render_meta_tags,
    shorten,
    write_card_requests,
    write_manifest,
    write_meta_partials,
)


SITE = SiteConfig(
    title="Example Site",
    base_url="https://example.com",
    author="Site Author",
    image="/profile.png",
)


def _preview(**kwargs) -> PagePreview:
    defaults = dict(
        source=Path("posts/hello-world.md"),
        url="https://example.com/posts/hello-world/",
        title="Hello World",
        teaser="This is the intro.",
    )
    defaults.update(kwargs)
    return PagePreview(**defaults)


def test_render_meta_tags_contains_og_and_twitter_tags():
    html = render_meta_tags(_preview(), SITE)

    assert '<meta property="og:title" content="Hello World">' in html
    assert '<meta property="og:description" content="This is the intro.">' in html
    assert '<meta property="og:type" content="article">' in html
    assert '<meta property="og:url" content="https://example.com/posts/hello-world/">' in html
    assert '<meta property="og:site_name" content="Example Site">' in html
    assert '<meta property="og:image" content="https://example.com/profile.png">' in html
    assert '<meta name="twitter:card" content="summary_large_image">' in html


def test_render_meta_tags_escapes_and_collapses_whitespace():
    preview = _preview(title='Tips & "Tricks" <script>', teaser="Line one\n\nline   two")
    html = render_meta_tags(preview, SiteConfig())

    assert "<script>" not in html
    assert "Tips &amp; &#34;Tricks&#34; &lt;script&gt;" in html
    assert 'content="Line one line two"' in html
    assert "og:image" not in html
    assert "og:site_name" not in html
    assert '<meta name="twitter:card" content="summary">' in html


def test_page_image_overrides_site_image():
    preview = _preview(fields={"images": ["https://cdn.example.com/cover.png"]})
    html = render_meta_tags(preview, SITE)
    assert 'content="https://cdn.example.com/cover.png"' in html


def test_section_index_is_website_type():
    html = render_meta_tags(_preview(source=Path("posts/_index.md")), SITE)
    assert '<meta property="og:type" content="website">' in html


def test_shorten_on_word_boundary():
    assert shorten("one two three", 9) == "one two…"
    assert shorten("short", 10) == "short"
    assert len(shorten("word " * 100, 50)) <= 50


def test_build_card_request():
    preview = _preview(teaser="A  long\nteaser", fields={"author": "Jane"})
    card = build_card_request(preview, SITE, max_quote_chars=200)
    assert card == {
        "key": "posts-hello-world",
        "title": "Hello World",
        "quote": "A long teaser",
        "url": "https://example.com/posts/hello-world/",
        "site_name": "Example Site",
        "author": "Jane",
    }
    assert build_card_request(_preview(), SITE)["author"] == "Site Author"


def test_writers_skip_unpublished_previews(tmp_path: Path):
    previews = [
        _preview(),
        _preview(source=Path("drafts/wip.md"), status="skipped"),
        _preview(source=Path("posts/broken.md"), status="error", error="boom"),
        _preview(source=Path("about.md"), status="fallback", fallbacks=["teaser:site"]),
    ]

    partials = write_meta_partials(previews, SITE, tmp_path / "og")
    cards_path = write_card_requests(previews, SITE, tmp_path / "cards.json")

    assert [p.name for p in partials] == ["posts-hello-world.html", "about.html"]
    cards = json.loads(cards_path.read_text(encoding="utf-8"))
    assert [c["key"] for c in cards] == ["posts-hello-world", "about"]


def test_write_manifest_serialises_dates(tmp_path: Path):
    previews = [
        _preview(fields={"date": datetime.date(2024, 1, 2)}),
        _preview(source=Path("posts/broken.md"), status="error", error="boom"),
    ]
    path = write_manifest(previews, tmp_path / "manifest.jsonl")
    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]

    assert lines[0]["fields"]["date"] == "2024-01-02"
    assert lines[0]["source"] == "posts/hello-world.md"
    assert lines[1]["status"] == "error"
    assert lines[1]["error"] == "boom"
