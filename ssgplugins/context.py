"""
Site context handed to every plugin.

Replaces the host's implicitly bound ``this``: configuration, link helpers,
the diagnostic sink and the state accumulated across articles all live on
one explicit object that is passed to each hook receiver.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import urljoin

from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from .config import get_path
from .exceptions import ContextError

logger = logging.getLogger(__name__)

ABSOLUTE_PREFIXES = ("http://", "https://")


def is_absolute(url: str) -> bool:
    return url.startswith(ABSOLUTE_PREFIXES)


class SiteContext:
    """
    Everything a plugin may need from the running site build.

    Args:
        config: Site configuration, nested dicts as loaded by the host
        mode: "dev" or "prod"; dev mode never talks to remote services
        site_path: Root directory of the site sources
        data: Data files loaded by the host (``data["webmentions"]`` etc.)
        articles: Articles known to the host, either a list or a mapping
            of collection name to list (``{"post": [...]}``)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        mode: str = "prod",
        site_path: str = ".",
        data: Optional[Dict[str, Any]] = None,
        articles: Optional[Union[List[Any], Dict[str, List[Any]]]] = None,
    ):
        self.config = config if config is not None else {}
        self.mode = mode
        self.site_path = site_path
        self.data = data if data is not None else {}
        self.articles = articles if articles is not None else {}
        self.callables: Dict[str, Callable[..., Any]] = {}
        self.menus = None
        self.processors: Dict[str, Any] = {}
        self.warnings: List[str] = []

    @property
    def is_dev(self) -> bool:
        return self.mode == "dev"

    def setting(self, dotted: str, default: Any = None) -> Any:
        return get_path(self.config, dotted, default)

    # Diagnostics

    def warn(self, message: str, context: Optional[str] = None) -> None:
        """Log a non-fatal problem; ``context`` usually names the article path."""
        full = f"{message} ({context})" if context else message
        self.warnings.append(full)
        logger.warning(full)

    # URLs

    def qualify(self, url: str) -> str:
        """Turn a site-relative URL into an absolute one using ``site.url``."""
        if is_absolute(url):
            return url
        base = self.setting("site.url", "")
        if not base:
            logger.debug(f"No site.url configured, cannot qualify '{url}'")
            return url
        return urljoin(base, url)

    def normalize_href(self, href: str) -> str:
        """Give site-relative hrefs a leading slash and the configured terminator."""
        if is_absolute(href):
            return href
        if not href.startswith("/"):
            href = "/" + href
        terminate = self.setting("articleSpec.terminateUrl")
        if terminate and not href.endswith(terminate):
            href += terminate
        return href

    def link(
        self,
        label: str,
        target: Union[str, Mapping[str, Any]],
        title: Optional[str] = None,
        css_class: Optional[str] = None,
        target_attr: Optional[str] = None,
        absolute: bool = False,
    ) -> str:
        """
        Build an anchor.

        Args:
            label: Anchor content, inserted as-is (it may already be markup)
            target: URL, or a mapping with ``url`` or ``href`` plus any
                extra attributes for the anchor
            title: Optional title attribute
            css_class: Optional class attribute
            target_attr: Optional target attribute, e.g. "_blank"
            absolute: Qualify the href with the site URL (feed renderings)

        Returns:
            Anchor HTML
        """
        extra: Dict[str, Any] = {}
        if isinstance(target, Mapping):
            extra = dict(target)
            if extra.get("url"):
                href = extra.pop("url")
                extra.pop("href", None)
            elif extra.get("href"):
                href = extra.pop("href")
            else:
                raise ContextError("Link needs an 'href' or 'url' specification.")
        else:
            href = target

        href = self.normalize_href(str(href))
        if absolute:
            href = self.qualify(href)

        attrs = [("href", href)]
        attrs.extend((key, value) for key, value in extra.items() if value is not None)
        if title:
            attrs.append(("title", title))
        if css_class:
            attrs.append(("class", css_class))
        if target_attr:
            attrs.append(("target", target_attr))

        return str(
            format_html(
                "<a{}>{}</a>",
                format_html_join("", ' {}="{}"', attrs),
                mark_safe(label),
            )
        )
