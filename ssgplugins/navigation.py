"""
Previous/next links between articles.
"""

import logging
from typing import Iterable

from .models import NavigationLink

logger = logging.getLogger(__name__)


def link_neighbours(articles: Iterable) -> None:
    """
    Set ``prev`` and ``next`` on each article.

    ``articles`` must already be ordered newest to oldest. ``next`` points
    to the newer neighbour, ``prev`` to the older one, both as title/URL
    snapshots. The newest article gets no ``next`` and the oldest no
    ``prev``.
    """
    newer = None
    count = 0
    for article in articles:
        if newer is not None:
            article.next = NavigationLink.of(newer)
            newer.prev = NavigationLink.of(article)
        newer = article
        count += 1

    logger.debug(f"Linked {count} articles")
