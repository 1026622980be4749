"""Markdown to HTML conversion with math and code highlighting support.

The chain is Python-Markdown with these stages:

* ``pymdownx.arithmatex`` pulls ``$...$``, ``$$...$$``, ``\\(...\\)`` and
  ``\\[...\\]`` out of markdown processing and emits KaTeX-ready markup
  (``<span class="arithmatex">`` / ``<div class="arithmatex">``), typeset in the
  browser by KaTeX auto-render.
* ``fenced_code`` + ``codehilite`` highlight code blocks with Pygments, guessing
  the language when the fence does not name one.
* ``tables`` and ``toc`` for GitHub-style tables and heading anchors.

Raw HTML in the source is passed through unescaped.
"""

import functools
from typing import Any

import markdown
import pygments.formatters

HIGHLIGHT_CSS_CLASS = 'codehilite'
HIGHLIGHT_STYLE = 'github-dark'

MARKDOWN_EXTENSIONS: list[str] = [
    'pymdownx.arithmatex',
    'fenced_code',
    'codehilite',
    'tables',
    'toc',
]

MARKDOWN_EXTENSION_CONFIGS: dict[str, dict[str, Any]] = {
    'pymdownx.arithmatex': {'generic': True},
    'codehilite': {'css_class': HIGHLIGHT_CSS_CLASS, 'guess_lang': True},
}


def render_markdown(text: str) -> str:
    """Convert markdown text to an HTML fragment.

    A fresh ``markdown.Markdown`` instance is built per call, so the conversion
    holds no state between documents.
    """
    return markdown.markdown(
        text,
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
    )


@functools.cache
def highlight_css() -> str:
    """Return the Pygments stylesheet matching the highlighted code markup."""
    formatter = pygments.formatters.HtmlFormatter(style=HIGHLIGHT_STYLE)
    return formatter.get_style_defs(f'.{HIGHLIGHT_CSS_CLASS}')
