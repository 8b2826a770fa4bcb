"""
Hook receivers for the plugins.

Connects every plugin to the lifecycle hook it reacts to. Within one hook,
receivers run in the order they are defined here.
"""

import logging

from django.dispatch import receiver

from .config import apply_defaults
from .exceptions import WebmentionError
from .hooks import after_article_parse, after_config, after_parse_late, article_prerender
from .markdown.postprocessors import apply_postprocessors
from .menus import MenuAggregator
from .navigation import link_neighbours
from .schema import SchemaProcessor
from .webmentions import WebmentionsProcessor

logger = logging.getLogger(__name__)

NAVIGATION_COLLECTION = "post"


@receiver(after_config)
def merge_plugin_defaults(sender, context, **kwargs):
    """Merge the plugin default sections under the site configuration."""
    logger.debug("Responding to after_config: merging plugin defaults")
    apply_defaults(context.config)


@receiver(after_config)
def start_menus(sender, context, **kwargs):
    """Give the build a fresh, empty menu accumulator."""
    context.menus = MenuAggregator()


@receiver(after_config)
def load_webmentions(sender, context, **kwargs):
    """Load received webmentions from the cache when webmentions are on."""
    if not context.setting("webmentionsSpec.on"):
        return
    WebmentionsProcessor.for_context(context).load_received(test=context.is_dev)


@receiver(after_article_parse)
def accumulate_menus(sender, context, article, **kwargs):
    """Add the article's menu entries to the menus."""
    logger.debug(f"Responding to after_article_parse: menus for '{article.rel_path}'")
    if context.menus is None:
        context.menus = MenuAggregator()
    context.menus.accumulate(article, context)


@receiver(after_article_parse)
def process_webmentions(sender, context, article, **kwargs):
    """
    Attach received webmentions to the article and send its outgoing ones.

    A failed send is logged and does not stop the remaining sends.
    """
    if not context.setting("webmentionsSpec.on"):
        return

    if not context.setting("webmentionsSpec.id"):
        logger.error("Webmentions enabled but no 'webmentionsSpec.id' specified in site config.")
        return

    proc = WebmentionsProcessor.for_context(context)

    # Received.
    wmentions = proc.mentions_for_url(context.qualify(article.url))
    if wmentions:
        article.wmentions = wmentions
        logger.info(f"Post {article.url} has {len(wmentions)} webmentions.")
    else:
        logger.debug(f"Post {article.url} has no webmentions.")

    # To send.
    test = context.is_dev
    for target in article.webmentions or []:
        if proc.has_been_sent(article.url, target, test=test):
            continue
        try:
            proc.send(article.url, target, test=test)
        except WebmentionError as e:
            logger.error(f"{e} ({article.rel_path})")


@receiver(after_article_parse)
def build_schema(sender, context, article, **kwargs):
    """Build the article's schema.org nodes."""
    if not context.setting("schemaSpec"):
        return
    SchemaProcessor(context, article).process()


@receiver(article_prerender)
def resolve_content_tokens(sender, context, article, **kwargs):
    """Resolve citation and link tokens, then restore escaped delimiters."""
    logger.debug(f"Responding to article_prerender: tokens in '{article.rel_path}'")
    apply_postprocessors(article, context)


@receiver(after_parse_late)
def finalize_menus(sender, context, **kwargs):
    """Sort every menu by position."""
    if context.menus is None:
        return
    context.menus.finalize()


@receiver(after_parse_late)
def link_prev_next(sender, context, **kwargs):
    """Link each post to its newer and older neighbours."""
    articles = context.articles
    if isinstance(articles, dict):
        articles = articles.get(NAVIGATION_COLLECTION)
    if not articles:
        return
    link_neighbours(articles)
