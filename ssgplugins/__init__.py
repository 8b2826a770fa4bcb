"""
Plugins for a static site generator.

Importing the package connects every plugin to the lifecycle hooks in
:mod:`ssgplugins.hooks`.
"""

from . import signals  # noqa: F401 - Register hook receivers
from .context import SiteContext
from .models import Article, ContentField, MenuEntry, NavigationLink

__all__ = [
    "Article",
    "ContentField",
    "MenuEntry",
    "NavigationLink",
    "SiteContext",
]
