"""Tests for the hook receivers, driving a small build through every hook."""

import json

import pytest

import ssgplugins  # noqa: F401 - connects the receivers
from ssgplugins import hooks
from ssgplugins.context import SiteContext
from ssgplugins.models import ContentField, NavigationLink


def _run_build(context, articles):
    hooks.after_config.send(sender=SiteContext, context=context)
    for article in articles:
        hooks.after_article_parse.send(sender=SiteContext, context=context, article=article)
    hooks.after_parse_late.send(sender=SiteContext, context=context)
    for article in articles:
        hooks.article_prerender.send(sender=SiteContext, context=context, article=article)


@pytest.fixture
def build_context(tmp_path):
    return SiteContext(config={"site": {"url": "https://example.com"}}, site_path=str(tmp_path))


class TestBuild:
    """End to end runs through the hooks."""

    def test_config_defaults_and_menus_started(self, build_context):
        hooks.after_config.send(sender=SiteContext, context=build_context)

        assert build_context.config["webmentionsSpec"]["on"] is False
        assert build_context.config["site"]["url"] == "https://example.com"
        assert build_context.menus is not None
        assert not build_context.menus.finalized

    def test_full_build(self, build_context, make_article):
        newest = make_article(
            title="Newest", url="/newest/", menus={"main": {"pos": 5}},
            html="See (((Home|/|Go home)))",
        )
        middle = make_article(title="Middle", url="/middle/", menus={"main": {"pos": 1}})
        oldest = make_article(
            title="Oldest", url="/oldest/", menus={"main": {}},
            html="(((bqcite-Shakespeare|/quotes/1)))",
        )
        articles = [newest, middle, oldest]
        build_context.articles = {"post": articles}

        _run_build(build_context, articles)

        # Menus
        assert [e.title for e in build_context.menus["main"]] == ["Middle", "Newest", "Oldest"]

        # Navigation
        assert newest.next is None
        assert newest.prev == NavigationLink("Middle", "/middle/")
        assert oldest.next == NavigationLink("Middle", "/middle/")
        assert oldest.prev is None

        # Tokens
        assert newest.content.html == 'See <a href="/" title="Go home">Home</a>'
        assert newest.content.html_feed == (
            'See <a href="https://example.com/" title="Go home">Home</a>'
        )
        assert 'href="https://example.com/quotes/1"' in oldest.content.html_feed
        assert 'href="/quotes/1"' in oldest.content.html

        # Schema
        assert any(node["@type"] == "WebSite" for node in newest.schema)

        assert build_context.warnings == []

    def test_plain_article_list_is_linked(self, build_context, make_article):
        articles = [make_article(title="B", url="/b/"), make_article(title="A", url="/a/")]
        build_context.articles = articles

        _run_build(build_context, articles)

        assert articles[1].next == NavigationLink("B", "/b/")

    def test_abstract_tokens_resolved(self, build_context, make_article):
        article = make_article()
        article.abstract = ContentField(html="(((bqcite-Anon)))", html_feed="(((bqcite-Anon)))")

        _run_build(build_context, [article])

        assert "<cite>Anon</cite>" in article.abstract.html
        assert "<cite>Anon</cite>" in article.abstract.html_feed


class TestWebmentionHooks:
    """Webmentions driven through after_article_parse."""

    def test_received_and_dummy_sent(self, tmp_path, make_article):
        context = SiteContext(
            config={
                "site": {"url": "https://example.com"},
                "webmentionsSpec": {"on": True, "id": "example.com"},
            },
            mode="dev",
            site_path=str(tmp_path),
            data={
                "webmentions": [
                    {
                        "wm-target": "https://example.com/a-post/",
                        "wm-property": "in-reply-to",
                        "author": {"name": "Bob"},
                        "published": "2024-02-02",
                        "content": {"text": "Agreed"},
                    }
                ]
            },
        )
        article = make_article(url="/a-post/", webmentions=["https://target.example/"])

        _run_build(context, [article])
        # Second build must not send again
        _run_build(context, [article])

        assert [m["author"]["name"] for m in article.wmentions] == ["Bob"]
        log = json.loads((tmp_path / "_data/webmentions/cache/testSent.json").read_text())
        assert len(log) == 1
        assert log[0].startswith("/a-post/|https://target.example/|")

    def test_missing_id_skips(self, tmp_path, make_article, caplog):
        context = SiteContext(
            config={"site": {"url": "https://example.com"}, "webmentionsSpec": {"on": True}},
            mode="dev",
            site_path=str(tmp_path),
        )
        article = make_article(webmentions=["https://target.example/"])

        _run_build(context, [article])

        assert article.wmentions is None
        assert "no 'webmentionsSpec.id'" in caplog.text
        assert not (tmp_path / "_data/webmentions/cache/testSent.json").exists()
