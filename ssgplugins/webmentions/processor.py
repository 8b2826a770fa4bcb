"""
Webmention bookkeeping.

Received mentions are pulled from a webmention.io style API and cached as
JSON under ``webmentionsSpec.wmDir``. Sent mentions are logged to a JSON
list of ``source|target|timestamp`` lines, newest first, so an article
never sends the same mention twice.
"""

import copy
import json
import logging
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urljoin

import bleach
import requests
from bs4 import BeautifulSoup

from ..exceptions import WebmentionError

logger = logging.getLogger(__name__)

PROCESSOR_KEY = "webmentions"


@lru_cache(maxsize=1)
def _get_bleach_config():
    """Cache bleach configuration for better performance."""
    allowed_tags = set(bleach.sanitizer.ALLOWED_TAGS).union(
        {"p", "br", "span", "cite", "del", "ins", "sup", "sub", "pre", "img"}
    )
    allowed_attributes = dict(bleach.sanitizer.ALLOWED_ATTRIBUTES)
    allowed_attributes["img"] = ["src", "alt", "title"]
    allowed_attributes["a"] = ["href", "title", "rel"]
    return frozenset(allowed_tags), allowed_attributes


def sanitize_html(html: str) -> str:
    tags, attributes = _get_bleach_config()
    return bleach.clean(html, tags=tags, attributes=attributes, strip=True)


def _has_required_fields(entry: Dict[str, Any]) -> bool:
    author = entry.get("author") or {}
    return bool(author.get("name") and entry.get("published") and entry.get("content"))


def _sanitize_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    entry = copy.deepcopy(entry)
    content = entry.get("content")
    if isinstance(content, dict) and content.get("content-type") == "text/html":
        content["value"] = sanitize_html(content.get("value") or "")
    return entry


def discover_endpoint(target: str, timeout: Union[int, float] = 10) -> Optional[str]:
    """
    Find the webmention endpoint advertised by ``target``.

    Checks the HTTP ``Link`` header first, then ``<link>``/``<a>`` elements
    with ``rel="webmention"`` in the page body.
    """
    response = requests.get(target, timeout=timeout)
    response.raise_for_status()

    link = response.links.get("webmention")
    if link and "url" in link:
        return urljoin(response.url or target, link["url"])

    soup = BeautifulSoup(response.text, "html.parser")
    element = soup.find(["link", "a"], rel="webmention", href=True)
    if element is not None:
        return urljoin(response.url or target, element["href"])

    return None


class WebmentionsProcessor:
    """
    Webmentions for one site build.

    Use :meth:`for_context` to get the processor attached to a SiteContext.
    """

    def __init__(self, context):
        self.context = context
        self.spec = context.setting("webmentionsSpec", {}) or {}
        self.mentions: Optional[List[Dict[str, Any]]] = context.data.get("webmentions")
        self._sent: Optional[List[str]] = None

    @classmethod
    def for_context(cls, context) -> "WebmentionsProcessor":
        proc = context.processors.get(PROCESSOR_KEY)
        if proc is None:
            proc = cls(context)
            context.processors[PROCESSOR_KEY] = proc
        return proc

    @property
    def timeout(self):
        return self.spec.get("timeout", 10)

    def _path(self, name: str) -> Path:
        return Path(self.context.site_path) / self.spec.get("wmDir", "") / name

    def _received_path(self, test: bool = False) -> Path:
        return self._path(self.spec["cacheFileTest"] if test else self.spec["cacheFile"])

    def _sent_path(self, test: bool = False) -> Path:
        return self._path(self.spec["sentFileTest"] if test else self.spec["sentFile"])

    # Received

    def load_received(self, test: bool = False) -> Optional[List[Dict[str, Any]]]:
        """Load received mentions from the cache file, if there is one."""
        if self.mentions is not None:
            return self.mentions

        path = self._received_path(test)
        if not path.exists():
            logger.debug(f"No webmentions cache at {path}")
            return None

        try:
            self.mentions = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Could not read webmentions cache {path}: {e}", exc_info=True)
            return None
        return self.mentions

    def refresh_received(self, test: bool = False) -> Optional[List[Dict[str, Any]]]:
        """
        Fetch received mentions from the mentions API and cache them.

        On failure the previously loaded mentions are kept.
        """
        params = {
            "domain": self.spec.get("id"),
            "token": self.spec.get("apiKey"),
            "per-page": self.spec.get("perPage"),
        }
        try:
            response = requests.get(self.spec["mentionsApi"], params=params, timeout=self.timeout)
            response.raise_for_status()
            children = response.json().get("children", [])
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Could not fetch webmentions: {e}")
            return self.mentions

        path = self._received_path(test)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(children, indent=1), encoding="utf-8")

        self.mentions = children
        logger.info(f"Fetched {len(children)} webmentions")
        return self.mentions

    def mentions_for_url(self, url: str) -> Optional[List[Dict[str, Any]]]:
        """
        Received mentions targeting ``url``.

        Only entries of the configured types with an author name, a
        publication date and content are returned; HTML content is
        sanitised. Returns None when no mentions are loaded at all.
        """
        if self.mentions is None:
            return None

        types = self.spec.get("types") or []
        return [
            _sanitize_entry(entry)
            for entry in self.mentions
            if entry.get("wm-target") == url
            and entry.get("wm-property") in types
            and _has_required_fields(entry)
        ]

    def is_own_webmention(self, entry: Dict[str, Any]) -> bool:
        urls = self.spec.get("ownUrls") or [self.context.setting("site.url")]
        author_url = (entry.get("author") or {}).get("url")
        return bool(author_url) and author_url in urls

    # Sent

    def sent(self, reload: bool = False, test: bool = False) -> List[str]:
        if reload:
            self._sent = None

        if self._sent is None:
            path = self._sent_path(test)
            self._sent = []
            if path.exists():
                try:
                    self._sent = json.loads(path.read_text(encoding="utf-8"))
                except (OSError, ValueError) as e:
                    logger.error(f"Could not read sent webmentions log {path}: {e}", exc_info=True)

        return self._sent

    def has_been_sent(self, source: str, target: str, test: bool = False) -> Union[str, bool]:
        """Return the time a mention was sent, or False if it never was."""
        prefix = f"{source}|{target}|"
        for line in self.sent(test=test):
            if line.startswith(prefix):
                return line.split("|")[2]
        return False

    def log_sent(self, source: str, target: str, test: bool = False) -> None:
        line = f"{source}|{target}|{datetime.now(timezone.utc).isoformat()}"
        sent = self.sent(test=test)
        sent.insert(0, line)

        path = self._sent_path(test)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(sent, indent=1), encoding="utf-8")
        self._sent = None

    def send(self, source: str, target: str, test: bool = False) -> None:
        """
        Send a webmention from the article at ``source`` to ``target``.

        In test mode nothing leaves the machine; the mention is only logged.
        """
        if test:
            logger.info(f"==> Dummy webmention send from: {source} to: {target}")
            self.log_sent(source, target, test=True)
            return

        try:
            endpoint = discover_endpoint(target, timeout=self.timeout)
            if endpoint is None:
                raise WebmentionError(f"No webmention endpoint found for: {target}")
            response = requests.post(
                endpoint,
                data={"source": self.context.qualify(source), "target": target},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise WebmentionError(
                f"Failed to send webmention from: {source} to: {target}: {e}"
            ) from e

        if not response.ok:
            raise WebmentionError(
                f"Failed to send webmention from: {source} to: {target} "
                f"(status {response.status_code})"
            )

        logger.info(f"==> Sent webmention from: {source} to: {target}")
        self.log_sent(source, target, test=False)
