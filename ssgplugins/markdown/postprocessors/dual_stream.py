# ssgplugins/markdown/postprocessors/dual_stream.py
"""
Apply one token resolver to both renderings of a content field.

Tokens are found once, in the site rendering. Each match is resolved to a
(site, feed) pair and then substituted into the matching stream, so both
streams always resolve the same tokens in the same order and differ only in
how link targets are written.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ...models import ContentField
from .scanner import TokenMatch, TokenScanner

logger = logging.getLogger(__name__)

# (site rendering, feed rendering)
Rendering = Tuple[str, str]
Resolver = Callable[[TokenMatch], Optional[Rendering]]


def substitute(stream: str, replacements: Sequence[Tuple[str, str]]) -> str:
    """
    Replace each token text with its rendering, in order.

    Every lookup starts after the previous replacement, so repeated
    identical tokens are consumed one by one from the left. A token that
    cannot be found in ``stream`` is skipped.
    """
    parts: List[str] = []
    cursor = 0
    for token, rendering in replacements:
        index = stream.find(token, cursor)
        if index < 0:
            logger.debug(f"Token '{token}' not found in stream, left unchanged")
            continue
        parts.append(stream[cursor:index])
        parts.append(rendering)
        cursor = index + len(token)
    parts.append(stream[cursor:])
    return "".join(parts)


def rewrite_dual_stream(field: ContentField, scanner: TokenScanner, resolver: Resolver) -> None:
    """
    Resolve every token ``scanner`` finds in ``field.html``.

    ``resolver`` returns the site and feed renderings for a match, or None
    to leave that token alone. Both ``field.html`` and ``field.html_feed``
    are updated in place.
    """
    site: List[Tuple[str, str]] = []
    feed: List[Tuple[str, str]] = []

    for match in scanner.scan(field.html):
        rendering = resolver(match)
        if rendering is None:
            continue
        site_form, feed_form = rendering
        site.append((match.text, site_form))
        feed.append((match.text, feed_form))

    if not site:
        return

    field.html = substitute(field.html, site)
    field.html_feed = substitute(field.html_feed, feed)
