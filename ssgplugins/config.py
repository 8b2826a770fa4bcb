"""
Default configuration sections for the plugins.

The host loads the site configuration; when ``after_config`` fires each
section below is merged underneath it, so values from the site win.
"""

import copy
from typing import Any, Dict

DEFAULT_CONFIG = {
    "site": {
        "url": "",
    },
    "articleSpec": {
        # Appended to site-relative hrefs built by SiteContext.link, e.g. "/"
        "terminateUrl": None,
    },
    "webmentionsSpec": {
        "apiKey": None,
        "cacheFile": "received.json",
        "cacheFileTest": "testReceived.json",
        "id": None,
        "mentionsApi": "https://webmention.io/api/mentions.jf2",
        "on": False,
        "ownUrls": None,
        "perPage": 10000,
        "sentFile": "sent.json",
        "sentFileTest": "testSent.json",
        "timeout": 10,
        "typeIcons": True,
        "types": ["mention-of", "in-reply-to"],
        "wmDir": "_data/webmentions/cache",
    },
    "schemaSpec": {
        "publisher": {
            "specLoc": "cfg",
            "spec": "site.publisher",
            "type": "Organization",
        },
        "author": {
            "specLoc": "cfg",
            "spec": "site.authors",
            "type": "Person",
            "each": True,
        },
        "website": {
            "specLoc": "cfg",
            "spec": "site",
            "type": "WebSite",
            "wanted": {
                "name": {"from": "title"},
                "description": None,
                "keywords": None,
                "image": {"from": "publisher.logo"},
            },
        },
    },
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return ``base`` updated recursively with ``override``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def merge_section(config: Dict[str, Any], name: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``defaults`` under ``config[name]`` in place and return the section."""
    current = config.get(name)
    if not isinstance(current, dict):
        current = {}
    config[name] = deep_merge(defaults, current)
    return config[name]


def apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge every default section into ``config``."""
    for name, defaults in DEFAULT_CONFIG.items():
        merge_section(config, name, defaults)
    return config


def get_path(data: Any, dotted: str, default: Any = None) -> Any:
    """Look up ``a.b.c`` style paths through nested dicts and objects."""
    current = data
    for part in dotted.split("."):
        if current is None or isinstance(current, (str, int, float, list, tuple)):
            return default
        if isinstance(current, dict):
            current = current.get(part)
        elif hasattr(current, "get"):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return default if current is None else current
