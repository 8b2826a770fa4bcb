# ssgplugins/markdown/postprocessors/bq_cite.py
"""
Postprocessor that turns blockquote citation tokens into citation markup.

Converts:
    (((bqcite-Shakespeare)))            → <span class="article-bqcite">&mdash; <cite>Shakespeare</cite></span>
    (((bqcite-Shakespeare|/quotes/1)))  → same, with the <cite> linked to /quotes/1

The feed rendering links to the fully qualified URL.
"""

import re
from html import unescape
from typing import Optional

from .dual_stream import Rendering, rewrite_dual_stream
from .scanner import TokenMatch, TokenScanner

BQCITE_TOKEN = re.compile(r"\(\(\(bqcite-(.+?)\)\)\)")

BQCITE_CLASS = "article-bqcite"
BQCITE_LINK_TITLE = "Go to the quoted article."
BQCITE_LINK_TARGET = "_blank"

_scanner = TokenScanner(BQCITE_TOKEN)


def _wrap(inner: str, css_class: str) -> str:
    return f'<span class="{css_class}">&mdash; {inner}</span>'


def render_citation(match: TokenMatch, context, css_class: str = BQCITE_CLASS) -> Optional[Rendering]:
    """
    Render one citation token.

    Args:
        match: Token match, group 1 is ``NAME`` or ``NAME|URL``
        context: SiteContext providing ``link``
        css_class: Class of the wrapping span

    Returns:
        Site and feed renderings
    """
    cited = match.group(1)

    if "|" not in cited:
        plain = _wrap(f"<cite>{cited}</cite>", css_class)
        return plain, plain

    name, url = cited.split("|")[:2]
    url = unescape(url)
    cite = f"<cite>{name}</cite>"
    site = context.link(cite, url, title=BQCITE_LINK_TITLE, target_attr=BQCITE_LINK_TARGET)
    feed = context.link(
        cite, url, title=BQCITE_LINK_TITLE, target_attr=BQCITE_LINK_TARGET, absolute=True
    )
    return _wrap(site, css_class), _wrap(feed, css_class)


def bq_cite(field, context, article=None, css_class: str = BQCITE_CLASS) -> None:
    """
    Resolve citation tokens in both renderings of ``field``.

    Args:
        field: ContentField to rewrite in place
        context: SiteContext
        article: Owning article (unused, part of the postprocessor signature)
        css_class: Class of the wrapping span
    """
    rewrite_dual_stream(
        field,
        _scanner,
        lambda match: render_citation(match, context, css_class=css_class),
    )


def bq_cite_default(field, context, article=None) -> None:
    """
    Default configuration for bq_cite.

    This is the function that should be registered in POSTPROCESSORS.
    """
    bq_cite(field, context, article, css_class=BQCITE_CLASS)
