"""
Schema.org structured data for articles.
"""

from .processor import SchemaProcessor, graph, schema_id, schema_idref

__all__ = [
    "SchemaProcessor",
    "graph",
    "schema_id",
    "schema_idref",
]
