def get_pandoc_config():
    """
    Configuration for pypandoc/Pandoc markdown rendering.

    Article bodies are plain markdown with strikethrough and pipe tables,
    plus raw HTML so placeholder tokens and inline markup pass through
    untouched for the postprocessors.
    """
    return {
        "format": "markdown+strikeout+pipe_tables+raw_html+fenced_code_blocks+footnotes",
        "to": "html5",
        "extra_args": [
            # Keep token text like (((a|b))) on one line
            "--wrap=none",
        ],
        # Pandoc filters can be added here (Python or Lua filters)
        "filters": [],
    }
