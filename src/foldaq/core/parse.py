"""markdown-it parser construction with the mdBook extension set"""

from markdown_it import MarkdownIt
from mdformat.plugins import PARSER_EXTENSIONS
from mdformat.renderer import MDRenderer

from foldaq.config import Settings
from foldaq.core.emit import FoldExtension


# mdformat plugins covering tables, strikethrough, task lists (gfm) and footnotes.
PLUGIN_NAMES = ("gfm", "footnote")


def _load_plugin(name: str):
    """Return an installed mdformat parser extension by entry point name."""
    try:
        return PARSER_EXTENSIONS[name]
    except KeyError as e:
        raise ValueError(f"mdformat plugin {name!r} is not installed") from e


def make_parser(settings: Settings) -> MarkdownIt:
    """Build a CommonMark MarkdownIt that parses and re-renders markdown.

    Parser and renderer share one plugin list so every syntax the parser
    recognises has a matching markdown renderer.
    """
    mdit = MarkdownIt("commonmark", renderer_cls=MDRenderer)
    mdit.options["mdformat"] = {
        "number": False,
        "wrap": "keep",
        "end_of_line": "lf",
        "newlines_after_codeblock": settings.newlines_after_codeblock,
    }
    mdit.options["store_labels"] = True
    mdit.options["codeformatters"] = {}
    mdit.options["parser_extension"] = [FoldExtension]

    for name in PLUGIN_NAMES:
        plugin = _load_plugin(name)
        if plugin not in mdit.options["parser_extension"]:
            mdit.options["parser_extension"].append(plugin)
            plugin.update_mdit(mdit)

    # mdBook does not autolink bare URLs
    mdit.options["linkify"] = False
    mdit.disable("linkify", ignoreInvalid=True)
    return mdit
