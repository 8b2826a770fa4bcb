from .postprocessors import POSTPROCESSORS, apply_postprocessors
from .renderer import build_article, build_content_field, render_markdown

__all__ = [
    "POSTPROCESSORS",
    "apply_postprocessors",
    "build_article",
    "build_content_field",
    "render_markdown",
]
