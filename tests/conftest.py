"""Shared fixtures."""

import pytest

from ssgplugins.config import apply_defaults
from ssgplugins.context import SiteContext
from ssgplugins.models import Article, ContentField


@pytest.fixture
def site_config():
    return {
        "site": {
            "url": "https://example.com",
            "title": "Example Site",
            "description": "An example site",
            "publisher": {"name": "Example Ltd", "url": "https://example.com", "logo": "/logo.png"},
            "authors": {"jane": {"name": "Jane Doe", "url": "https://example.com/jane"}},
        },
    }


@pytest.fixture
def context(site_config, tmp_path):
    return SiteContext(config=apply_defaults(site_config), site_path=str(tmp_path))


@pytest.fixture
def make_article():
    def _make(title="A post", url="/a-post/", rel_path="_posts/a-post.md", html="", **kwargs):
        article = Article(title=title, url=url, rel_path=rel_path, **kwargs)
        article.content = ContentField(html=html, html_feed=html)
        return article

    return _make
