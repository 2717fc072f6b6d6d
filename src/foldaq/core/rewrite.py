"""Fold marker substitution over markdown-it inline text tokens"""

import re

from markdown_it.token import Token


# Applied in this order; markers never overlap so a single left-to-right scan is equivalent.
MARKERS: dict[str, str] = {
    "#f": "<details><summary>",
    "#q": "</summary>",
    "#a": "</details>",
}
MARKER_RE = re.compile("|".join(re.escape(m) for m in MARKERS))


def split_markers(content: str) -> list[tuple[str, str]]:
    """Split text into ('text', str) and ('html_inline', str) pieces, markers replaced by HTML."""
    pieces: list[tuple[str, str]] = []
    pos = 0
    for m in MARKER_RE.finditer(content):
        if m.start() > pos:
            pieces.append(("text", content[pos:m.start()]))
        pieces.append(("html_inline", MARKERS[m.group()]))
        pos = m.end()
    if pos < len(content):
        pieces.append(("text", content[pos:]))
    return pieces


def _rewrite_text(token: Token) -> list[Token]:
    """Replace one text token with text/raw-HTML tokens; untouched if it holds no marker."""
    if not MARKER_RE.search(token.content):
        return [token]
    return [
        Token(type=kind, tag="", nesting=0, level=token.level, content=piece)
        for kind, piece in split_markers(token.content)
    ]


def rewrite_inline(children: list[Token]) -> list[Token]:
    """Rewrite the text tokens of one inline token's children.

    Only plain text runs are touched: code spans, inline HTML and image
    alt text (nested under the image token) keep their markers.
    """
    out: list[Token] = []
    for child in children:
        if child.type == "text":
            out.extend(_rewrite_text(child))
        else:
            out.append(child)
    return out


def rewrite_tokens(tokens: list[Token]) -> list[Token]:
    """Rewrite every inline token in a block token stream, in place; returns tokens."""
    for tok in tokens:
        if tok.type == "inline" and tok.children:
            tok.children = rewrite_inline(tok.children)
    return tokens
