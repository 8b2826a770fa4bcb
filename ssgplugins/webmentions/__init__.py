"""
Webmention sending and receiving.
"""

from .processor import WebmentionsProcessor, discover_endpoint, sanitize_html

__all__ = [
    "WebmentionsProcessor",
    "discover_endpoint",
    "sanitize_html",
]
