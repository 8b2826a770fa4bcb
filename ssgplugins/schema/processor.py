"""
Schema.org graph assembly.

Each entry of ``schemaSpec`` describes one graph node::

    website:
      specLoc: cfg          # read from the site config ("article" otherwise)
      spec: site            # dotted path into the config
      type: WebSite         # defaults to the capitalised key
      each: false           # true: one node per item of the source
      wanted:               # fields to copy; absent means all fields
        name: {from: title} # copy from another source field
        description: null   # copy the same-named field
        inLanguage: en      # literal value

Nodes get an ``@id`` of ``/#<slug>`` so other nodes can reference them.
"""

import logging
from typing import Any, Dict, List, Optional

from django.utils.text import slugify

from ..config import get_path

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"

IMAGE_FIELDS = ("logo", "image")


def schema_id(name: str) -> str:
    return "/#" + slugify(name)


def schema_idref(name: str) -> Dict[str, str]:
    return {"@id": schema_id(name)}


def graph(nodes: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Wrap nodes in a JSON-LD document."""
    return {"@context": SCHEMA_CONTEXT, "@graph": list(nodes)}


def _is_record(value: Any) -> bool:
    return hasattr(value, "__dataclass_fields__")


def _fields_of(source: Any) -> Dict[str, Any]:
    if isinstance(source, dict):
        return dict(source)
    if _is_record(source):
        # Nested records (rendered content, navigation links) and the
        # schema itself do not belong in a node
        fields = {
            name: getattr(source, name)
            for name in source.__dataclass_fields__
            if name != "schema" and not _is_record(getattr(source, name))
        }
        fields.update(getattr(source, "extra", None) or {})
        fields.pop("extra", None)
        return fields
    return dict(vars(source))


class SchemaProcessor:
    """Builds the schema.org nodes for one article."""

    def __init__(self, context, article):
        self.context = context
        self.article = article
        self.spec = context.setting("schemaSpec", {}) or {}
        self.schema: List[Dict[str, Any]] = []

    def process(self) -> List[Dict[str, Any]]:
        for key, node_spec in self.spec.items():
            if not node_spec:
                continue

            source = self._source(node_spec)
            if source is None:
                logger.debug(f"No source data for schema node '{key}', skipped")
                continue

            if node_spec.get("each"):
                self.schema.extend(self._process_each(node_spec, source, key))
            else:
                self.schema.append(self._process_data(node_spec, source, key))

        self.article.schema = self.schema
        return self.schema

    def _source(self, node_spec: Dict[str, Any]) -> Any:
        if node_spec.get("specLoc", "article") == "cfg":
            return get_path(self.context.config, node_spec.get("spec", ""))
        return self.article

    def _process_each(self, node_spec, source, key) -> List[Dict[str, Any]]:
        if isinstance(source, dict):
            items = source.items()
        else:
            items = ((str(index), item) for index, item in enumerate(source))
        return [self._process_data(node_spec, item, f"{key}-{name}") for name, item in items]

    def _process_data(self, node_spec, source, key) -> Dict[str, Any]:
        node: Dict[str, Any] = {
            "@id": schema_id(node_spec.get("id") or key),
            "@type": node_spec.get("type") or key[:1].upper() + key[1:],
        }

        wanted: Optional[Dict[str, Any]] = node_spec.get("wanted")
        if wanted is None:
            wanted = {name: None for name in _fields_of(source)}

        for name, details in wanted.items():
            if details is None:
                value = get_path(source, name)
            elif isinstance(details, dict):
                value = get_path(source, details.get("from") or name)
            else:
                value = details

            if name in IMAGE_FIELDS and value is not None:
                value = self.image_urls(value)

            if value is not None:
                node[name] = value

        return node

    def image_urls(self, url):
        resolver = self.context.callables.get("getImageUrls")
        if resolver is None:
            return url
        return resolver(url)
