"""Tests for markdown rendering into content fields."""

import logging

import pytest

from ssgplugins.markdown import renderer
from ssgplugins.markdown.config import get_pandoc_config


@pytest.fixture
def fake_pandoc(monkeypatch):
    calls = []

    def convert_text(text, to, format, extra_args=(), filters=()):
        calls.append({"text": text, "to": to, "format": format, "extra_args": extra_args})
        return f"<p>{text}</p>"

    monkeypatch.setattr(renderer.pypandoc, "convert_text", convert_text)
    return calls


class TestRenderMarkdown:
    """Tests for render_markdown."""

    def test_uses_pandoc_config(self, fake_pandoc):
        assert renderer.render_markdown("Hello") == "<p>Hello</p>"

        config = get_pandoc_config()
        assert fake_pandoc[0]["to"] == config["to"] == "html5"
        assert fake_pandoc[0]["format"] == config["format"]
        assert fake_pandoc[0]["extra_args"] == config["extra_args"]


class TestBuildContentField:
    """Tests for build_content_field."""

    def test_renders_all_forms(self, fake_pandoc):
        field = renderer.build_content_field("Some *text*")

        assert field.md == "Some *text*"
        assert field.html == "<p>Some *text*</p>"
        assert field.html_feed == field.html
        assert field.text == "Some *text*"

    def test_empty_input(self, fake_pandoc):
        field = renderer.build_content_field("")
        assert (field.md, field.html, field.html_feed, field.text) == ("", "", "", "")
        assert fake_pandoc == []

    def test_conversion_failure_leaves_field_empty(self, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise RuntimeError("Pandoc died with exitcode 64")

        monkeypatch.setattr(renderer.pypandoc, "convert_text", broken)

        with caplog.at_level(logging.ERROR, logger="ssgplugins.markdown.renderer"):
            field = renderer.build_content_field("# Title", rel_path="_posts/bad.md")

        assert field.md == "# Title"
        assert field.html == field.html_feed == field.text == ""
        assert "Error parsing markdown" in caplog.text
        assert "_posts/bad.md" in caplog.text

    def test_missing_pandoc_binary(self, monkeypatch):
        def missing(*args, **kwargs):
            raise OSError("No pandoc was found")

        monkeypatch.setattr(renderer.pypandoc, "convert_text", missing)
        assert renderer.build_content_field("text").html == ""


class TestBuildArticle:
    """Tests for build_article."""

    def test_front_matter_mapping(self, fake_pandoc):
        article = renderer.build_article(
            {
                "title": "Hello",
                "url": "/hello/",
                "description": "Greeting",
                "menus": {"main": {"pos": 1}},
                "abstract": "Short",
                "keywords": ["a", "b"],
            },
            body="Long body",
            rel_path="_posts/hello.md",
        )

        assert article.title == "Hello"
        assert article.url == "/hello/"
        assert article.rel_path == "_posts/hello.md"
        assert article.menus == {"main": {"pos": 1}}
        assert article.content.html == "<p>Long body</p>"
        assert article.abstract.html == "<p>Short</p>"
        assert article.get("keywords") == ["a", "b"]
        assert article.webmentions == []
