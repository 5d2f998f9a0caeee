from pathlib import Path

import pytest

from og_extract.config import AppConfig


POSTS = {
    "posts/hello-world.md": (
        "---\n"
        "title: Hello World\n"
        "date: 2024-03-01\n"
        "tags: [swift]\n"
        "---\n"
        "This is the intro.\n"
        "<!--more-->\n"
        "Rest of the article.\n"
    ),
    "posts/no-marker.md": (
        "---\n"
        "title: No Marker\n"
        "description: Described in front-matter.\n"
        "---\n"
        "# Heading\n"
        "Body text without any teaser boundary.\n"
    ),
    "posts/untitled-note.md": "Just a note.\n<!--more-->\nMore.\n",
    "posts/draft.md": "---\ntitle: Work In Progress\ndraft: true\n---\nSoon.\n<!--more-->\n",
    "_index.md": "---\ntitle: Home\n---\nWelcome to the site.\n<!--more-->\n",
}


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    for rel, text in POSTS.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def cfg() -> AppConfig:
    cfg = AppConfig()
    cfg.site.title = "Example Site"
    cfg.site.description = "Site description."
    cfg.site.base_url = "https://example.com"
    cfg.logging.console = False
    return cfg
