"""Tests for the site context link helpers."""

import logging

import pytest

from ssgplugins.context import SiteContext
from ssgplugins.exceptions import ContextError


class TestQualify:
    """Tests for SiteContext.qualify."""

    def test_relative_url(self, context):
        assert context.qualify("/quotes/1") == "https://example.com/quotes/1"

    def test_root(self, context):
        assert context.qualify("/") == "https://example.com/"

    def test_absolute_url_unchanged(self, context):
        assert context.qualify("http://other.org/x") == "http://other.org/x"
        assert context.qualify("https://other.org/x") == "https://other.org/x"

    def test_without_site_url(self):
        assert SiteContext(config={}).qualify("/x") == "/x"


class TestLink:
    """Tests for SiteContext.link."""

    def test_simple(self, context):
        assert context.link("Home", "/") == '<a href="/">Home</a>'

    def test_leading_slash_added(self, context):
        assert context.link("About", "about") == '<a href="/about">About</a>'

    def test_all_attributes(self, context):
        html = context.link("X", "/x", title="Title", css_class="cls", target_attr="_blank")
        assert html == '<a href="/x" title="Title" class="cls" target="_blank">X</a>'

    def test_absolute(self, context):
        assert context.link("Q", "/quotes/1", absolute=True) == (
            '<a href="https://example.com/quotes/1">Q</a>'
        )

    def test_external_href_untouched(self, context):
        assert context.link("Ext", "https://other.org/p") == '<a href="https://other.org/p">Ext</a>'

    def test_label_is_not_escaped(self, context):
        assert context.link("<cite>Name</cite>", "/n") == '<a href="/n"><cite>Name</cite></a>'

    def test_attribute_values_escaped(self, context):
        html = context.link("X", "/x", title='Say "hi" & go')
        assert 'title="Say &quot;hi&quot; &amp; go"' in html

    def test_terminate_url(self, context):
        context.config["articleSpec"]["terminateUrl"] = "/"
        assert context.link("P", "/post") == '<a href="/post/">P</a>'
        assert context.link("P", "/post/") == '<a href="/post/">P</a>'
        assert context.link("P", "/post", absolute=True) == '<a href="https://example.com/post/">P</a>'

    def test_mapping_target(self, context):
        html = context.link("X", {"url": "/x", "rel": "me"})
        assert html == '<a href="/x" rel="me">X</a>'

    def test_mapping_target_href(self, context):
        assert context.link("X", {"href": "/y"}) == '<a href="/y">X</a>'

    def test_mapping_without_url_raises(self, context):
        with pytest.raises(ContextError):
            context.link("X", {"rel": "me"})


class TestWarn:
    """Tests for SiteContext.warn."""

    def test_records_and_logs(self, context, caplog):
        with caplog.at_level(logging.WARNING, logger="ssgplugins.context"):
            context.warn("Something odd.", "_posts/a.md")

        assert context.warnings == ["Something odd. (_posts/a.md)"]
        assert "Something odd. (_posts/a.md)" in caplog.text

    def test_without_context(self, context):
        context.warn("Plain.")
        assert context.warnings == ["Plain."]
