"""
Menu aggregation.

Articles declare the menus they belong to in their front matter::

    menus:
      main:
        pos: 2
        title: About

Entries are collected per menu name while articles are parsed, then sorted
once by position after all articles are in. After that the menus are
read-only.
"""

import logging
import threading
from operator import attrgetter
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .models import MenuDraft, MenuEntry

logger = logging.getLogger(__name__)

DEFAULT_POS = 5
UNNAMED_TITLE = "unnamed"


def _menu_pos(raw, article, context):
    if raw is None:
        return DEFAULT_POS
    if isinstance(raw, (int, float)):
        return raw
    try:
        return int(raw)
    except (TypeError, ValueError):
        pass
    try:
        return float(raw)
    except (TypeError, ValueError):
        context.warn(f"Menu position '{raw}' is not a number, using {DEFAULT_POS}.", article.rel_path)
        return DEFAULT_POS


def default_menu_entry(draft: MenuDraft, article, context) -> MenuEntry:
    """
    Fill a draft's missing fields from its article.

    - title: the entry's own, else the article title, else "unnamed" (warned)
    - description: the entry's own, else the article description
    - pos: the entry's own as a number, else DEFAULT_POS (warned if not numeric)
    """
    title = draft.title
    if not title:
        if article.title:
            title = article.title
        else:
            title = UNNAMED_TITLE
            context.warn("Unnamed menu title.", article.rel_path)

    description = draft.description or article.description or None
    pos = _menu_pos(draft.pos, article, context)

    return MenuEntry(title=title, pos=pos, description=description, extra=dict(draft.extra))


class MenuAggregator:
    """
    Collects menu entries across articles.

    ``accumulate`` is called once per article, in any order, and may be
    called from several threads. ``finalize`` is called once afterwards and
    sorts each menu by ``pos``; entries with equal positions keep the order
    in which they were accumulated.
    """

    def __init__(self):
        self._menus: Dict[str, List[MenuEntry]] = {}
        self._lock = threading.Lock()
        self._final = None

    @property
    def finalized(self) -> bool:
        return self._final is not None

    def accumulate(self, article, context) -> None:
        if not article.menus:
            return

        if self.finalized:
            logger.error(f"Menus already finalized, ignoring entries from '{article.rel_path}'")
            return

        for menu_name, raw in article.menus.items():
            entry = default_menu_entry(MenuDraft.from_raw(raw), article, context)
            with self._lock:
                self._menus.setdefault(menu_name, []).append(entry)

    def finalize(self) -> Mapping[str, Tuple[MenuEntry, ...]]:
        if self.finalized:
            return self._final

        with self._lock:
            ordered = {
                name: tuple(sorted(entries, key=attrgetter("pos")))
                for name, entries in self._menus.items()
            }
            self._final = MappingProxyType(ordered)

        logger.debug(f"Finalized {len(ordered)} menus")
        return self._final

    @property
    def menus(self) -> Mapping[str, Tuple[MenuEntry, ...]]:
        """Sorted menus once finalized, the entries collected so far before that."""
        if self.finalized:
            return self._final
        with self._lock:
            return MappingProxyType({name: tuple(entries) for name, entries in self._menus.items()})

    def __getitem__(self, menu_name: str) -> Tuple[MenuEntry, ...]:
        return self.menus[menu_name]

    def __contains__(self, menu_name: str) -> bool:
        return menu_name in self.menus
