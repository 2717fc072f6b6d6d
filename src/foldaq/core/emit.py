"""Token stream to markdown serialization via mdformat's renderer"""

import logging
from collections.abc import Mapping

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import RenderContext, RenderTreeNode

from foldaq.core.rewrite import MARKERS


logger = logging.getLogger(__name__)

# mdformat indents paragraph lines that could open an HTML block
HTML_BLOCK_GUARD = " " * 4
FOLD_HTML = tuple(MARKERS.values())


class SerializationError(RuntimeError):
    """The token stream could not be rendered back to markdown."""


def _render_root(node: RenderTreeNode, context: RenderContext) -> str:
    """Join top-level blocks with a blank line, except after a fenced code block."""
    after_fence = "\n" * context.options["mdformat"]["newlines_after_codeblock"]
    parts: list[str] = []
    previous = None
    for child in node.children:
        text = child.render(context)
        if not text:
            continue
        if parts:
            parts.append(after_fence if previous == "fence" else "\n\n")
        parts.append(text)
        previous = child.type
    return "".join(parts)


def _unguard_folds(text: str, node: RenderTreeNode, context: RenderContext) -> str:
    """Drop the HTML-block indent from paragraph lines that start with fold HTML.

    The indent would turn the line into an indented code block; the fold
    tags are meant to reach the HTML renderer as written.
    """
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.startswith(HTML_BLOCK_GUARD) and line[len(HTML_BLOCK_GUARD):].startswith(FOLD_HTML):
            lines[i] = line[len(HTML_BLOCK_GUARD):]
    return "\n".join(lines)


class FoldExtension:
    """mdformat parser extension carrying foldaq's serialization overrides.

    Listed first among the parser extensions so its renderers take
    precedence over those of the syntax plugins.
    """
    CHANGES_AST = True
    RENDERERS: Mapping = {"root": _render_root}
    POSTPROCESSORS: Mapping = {"paragraph": _unguard_folds}


def render_markdown(mdit: MarkdownIt, tokens: list[Token], env: dict) -> str:
    """Render tokens back to markdown with the parser's own renderer and options."""
    try:
        return mdit.renderer.render(tokens, mdit.options, env)
    except Exception as e:
        logger.debug("Renderer failed on %d tokens", len(tokens), exc_info=True)
        raise SerializationError(f"Markdown serialization failed: {e}") from e
