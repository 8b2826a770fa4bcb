# ssgplugins/markdown/postprocessors/escapes.py
"""
Postprocessor that restores escaped token delimiters.

Authors write ``%(%(%(`` and ``%)%)%)`` when they want a literal ``(((`` or
``)))`` in an article. This must run after every token postprocessor,
otherwise the restored delimiters would be read as tokens.

Before restoring, the site rendering is checked for ``(((...)))`` tokens
that no postprocessor resolved; those are reported and left in place.
"""

import re

from .scanner import TokenScanner

ESCAPES = (
    ("%(%(%(", "((("),
    ("%)%)%)", ")))"),
)

LEFTOVER_TOKEN = re.compile(r"\(\(\((.+?)\)\)\)")

_leftover_scanner = TokenScanner(LEFTOVER_TOKEN)


def unescape_delimiters(html: str) -> str:
    """Replace every escaped delimiter with the literal one."""
    for escaped, literal in ESCAPES:
        html = html.replace(escaped, literal)
    return html


def has_unresolved_tokens(html: str) -> bool:
    return _leftover_scanner.first(html) is not None


def escape_normalizer(field, context, article=None, check_leftovers: bool = True) -> None:
    """
    Warn about unresolved tokens, then unescape both renderings of ``field``.

    Args:
        field: ContentField to rewrite in place
        context: SiteContext used for warnings
        article: Owning article, its ``rel_path`` is named in warnings
        check_leftovers: Report unresolved tokens before unescaping
    """
    if check_leftovers and has_unresolved_tokens(field.html):
        rel_path = getattr(article, "rel_path", None)
        context.warn("Preprocessing '(((...)))' elements still remain.", rel_path)

    field.html = unescape_delimiters(field.html)
    field.html_feed = unescape_delimiters(field.html_feed)


def escape_normalizer_default(field, context, article=None) -> None:
    """
    Default configuration for escape_normalizer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    escape_normalizer(field, context, article, check_leftovers=True)
