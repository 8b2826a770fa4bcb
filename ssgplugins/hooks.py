"""
Lifecycle hooks fired by the host pipeline.

The host sends each signal with the SiteContext as ``context`` and, for the
per-article hooks, the Article as ``article``::

    hooks.article_prerender.send(sender=SiteContext, context=ctx, article=article)
"""

from django.dispatch import Signal

# Once, after the site configuration is loaded. Args: context
after_config = Signal()

# Once per article, after it is parsed. Args: context, article
after_article_parse = Signal()

# Once per article, before its templates are rendered. Args: context, article
article_prerender = Signal()

# Once, after every article is parsed and the collections are sorted. Args: context
after_parse_late = Signal()
