"""
Exceptions raised by the site generator plugins.
"""


class SsgPluginError(Exception):
    """Base class for all plugin errors."""


class ContextError(SsgPluginError):
    """Raised when the site context is asked for something it cannot build."""


class WebmentionError(SsgPluginError):
    """Raised when a webmention could not be delivered."""
