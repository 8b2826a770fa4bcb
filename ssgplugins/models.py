"""
Plain data records shared by the plugins.

Articles, their content fields, menu entries and navigation links are
owned by the host pipeline; the plugins only read and decorate them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

CONTENT_FIELDS = ("content", "abstract")


@dataclass
class ContentField:
    """
    One piece of article content in its different renderings.

    ``html`` is the site rendering with site-relative links, ``html_feed``
    is the rendering used for syndication feeds where every link must be
    absolute.
    """

    md: str = ""
    html: str = ""
    html_feed: str = ""
    text: str = ""


@dataclass(frozen=True)
class NavigationLink:
    """Title/URL snapshot of a neighbouring article."""

    title: str
    url: str

    @classmethod
    def of(cls, article: "Article") -> "NavigationLink":
        return cls(title=article.title, url=article.url)


@dataclass
class MenuDraft:
    """Menu entry as written in an article's front matter, before defaulting."""

    title: Optional[str] = None
    description: Optional[str] = None
    pos: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> "MenuDraft":
        """Build a draft from whatever the front matter held for a menu."""
        if isinstance(raw, MenuDraft):
            return raw
        if not isinstance(raw, dict):
            # `menus: {main: true}` style shorthand
            return cls()
        data = dict(raw)
        return cls(
            title=data.pop("title", None) or None,
            description=data.pop("description", None) or None,
            pos=data.pop("pos", None),
            extra=data,
        )


@dataclass(frozen=True)
class MenuEntry:
    """Menu entry with every default filled in."""

    title: str
    pos: int
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key in ("title", "pos", "description"):
            return getattr(self, key)
        return self.extra.get(key, default)

    def as_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update(title=self.title, pos=self.pos)
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass
class Article:
    """
    A parsed article.

    Fields the plugins do not know about are kept in ``extra`` and are
    still reachable through :meth:`get`.
    """

    title: str = ""
    url: str = ""
    rel_path: str = ""
    description: Optional[str] = None
    content: ContentField = field(default_factory=ContentField)
    abstract: ContentField = field(default_factory=ContentField)
    menus: Dict[str, Any] = field(default_factory=dict)
    prev: Optional[NavigationLink] = None
    next: Optional[NavigationLink] = None
    # Targets this article should send webmentions to.
    webmentions: List[str] = field(default_factory=list)
    # Webmentions received for this article.
    wmentions: Optional[List[Dict[str, Any]]] = None
    schema: List[Dict[str, Any]] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        if name in self.extra:
            return self.extra[name]
        return getattr(self, name, default)

    def content_field(self, name: str) -> ContentField:
        if name not in CONTENT_FIELDS:
            raise KeyError(name)
        return getattr(self, name)
