# ssgplugins/markdown/renderer.py

import logging

import pypandoc
from bs4 import BeautifulSoup

from ..models import Article, ContentField
from .config import get_pandoc_config

logger = logging.getLogger(__name__)

# Front matter keys that map onto Article attributes
ARTICLE_KEYS = ("title", "url", "description", "menus", "webmentions")


def render_markdown(text, context=None):
    """
    Convert markdown to HTML using pypandoc

    Args:
        text: Raw markdown text
        context: Optional dict for callers that need to pass data along
    """
    pandoc_config = get_pandoc_config()

    return pypandoc.convert_text(
        text,
        to=pandoc_config["to"],
        format=pandoc_config["format"],
        extra_args=pandoc_config["extra_args"],
        filters=pandoc_config.get("filters", []),
    )


def html_to_text(html: str) -> str:
    return BeautifulSoup(html, "html.parser").get_text()


def build_content_field(raw, context=None, rel_path=None) -> ContentField:
    """
    Build a content field from markdown.

    A conversion failure is logged and leaves the rendered fields empty;
    nothing is raised.

    Args:
        raw: Markdown source, may be empty or None
        context: Passed through to render_markdown
        rel_path: Source path of the article, for diagnostics
    """
    field = ContentField()
    if not raw:
        return field

    field.md = raw
    try:
        html = render_markdown(raw, context)
    except (RuntimeError, OSError) as e:
        logger.error(f"Error parsing markdown: {e} ({rel_path})", exc_info=True)
        return field

    field.html = html
    field.html_feed = html
    field.text = html_to_text(html)
    return field


def build_article(meta, body="", rel_path="", context=None) -> Article:
    """
    Build an Article from front matter and a markdown body.

    ``meta["abstract"]``, when present, is rendered as the abstract field.
    Keys that are not Article attributes end up in ``Article.extra``.
    """
    meta = dict(meta or {})
    abstract = meta.pop("abstract", None)
    known = {key: meta.pop(key) for key in ARTICLE_KEYS if key in meta}

    article = Article(rel_path=rel_path, extra=meta, **known)
    if article.menus is None:
        article.menus = {}
    if article.webmentions is None:
        article.webmentions = []
    article.content = build_content_field(body, context, rel_path)
    article.abstract = build_content_field(abstract, context, rel_path)
    return article
