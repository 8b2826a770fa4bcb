# ssgplugins/markdown/postprocessors/__init__.py

from ...models import CONTENT_FIELDS
from .bq_cite import bq_cite_default
from .escapes import escape_normalizer_default
from .link_tokens import link_tokens_default

POSTPROCESSORS = [
    bq_cite_default,  # Citation tokens, before link tokens which would also match them
    link_tokens_default,  # (((label|target[|title]))) link tokens
    escape_normalizer_default,  # Must be last: restores escaped (((/))) delimiters
    # Order matters - they run sequentially
]


def apply_postprocessors(article, context, fields=CONTENT_FIELDS):
    """Apply all postprocessors in order to each content field of ``article``"""
    for name in fields:
        field = article.content_field(name)
        for processor in POSTPROCESSORS:
            processor(field, context, article)
