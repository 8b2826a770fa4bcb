# ssgplugins/markdown/postprocessors/link_tokens.py
"""
Postprocessor that resolves inline link tokens.

Converts:
    (((Home|/)))            → <a href="/">Home</a>
    (((Home|/|Go home)))    → <a href="/" title="Go home">Home</a>

The feed rendering gets the same anchor with the href fully qualified,
since feed readers have no base URL to resolve against.
"""

import re
from html import unescape
from typing import Optional

from .dual_stream import Rendering, rewrite_dual_stream
from .scanner import TokenMatch, TokenScanner

LINK_TOKEN = re.compile(r"\(\(\((.+?)\|(.+?)\)\)\)")

_scanner = TokenScanner(LINK_TOKEN)


def render_link_token(match: TokenMatch, context) -> Optional[Rendering]:
    label, target = match.group(1), match.group(2)
    title = None
    if "|" in target:
        target, title = target.split("|")[:2]

    # Token text is already HTML-escaped and link() escapes attributes itself
    target = unescape(target)
    if title:
        title = unescape(title)

    site = context.link(label, target, title=title)
    feed = context.link(label, target, title=title, absolute=True)
    return site, feed


def link_tokens(field, context, article=None) -> None:
    """Resolve ``(((label|target[|title])))`` tokens in both renderings of ``field``."""
    rewrite_dual_stream(field, _scanner, lambda match: render_link_token(match, context))


def link_tokens_default(field, context, article=None) -> None:
    """
    Default configuration for link_tokens.

    This is the function that should be registered in POSTPROCESSORS.
    """
    link_tokens(field, context, article)
