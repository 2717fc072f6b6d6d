"""Pipeline step functions: fold one chapter, walk a book, preprocessor object"""

import logging
from collections.abc import Iterable, Iterator
from functools import lru_cache

from markdown_it import MarkdownIt

from foldaq.config import Settings, load_config
from foldaq.core.emit import SerializationError, render_markdown
from foldaq.core.models import Book, BookItem, Chapter, ChapterItem, PreprocessorContext
from foldaq.core.parse import make_parser
from foldaq.core.rewrite import rewrite_tokens


logger = logging.getLogger(__name__)

SUPPORTED_RENDERER = "html"


@lru_cache(maxsize=8)
def _parser(newlines_after_codeblock: int) -> MarkdownIt:
    """One parser per serializer setting, shared across chapters and books."""
    return make_parser(Settings(newlines_after_codeblock=newlines_after_codeblock))


def fold_text(content: str, settings: Settings = None) -> str:
    """Parse markdown, turn fold markers into <details> HTML, and re-serialize it."""
    mdit = _parser((settings or Settings()).newlines_after_codeblock)
    env: dict = {}
    tokens = mdit.parse(content, env)
    return render_markdown(mdit, rewrite_tokens(tokens), env)


def iter_chapters(items: Iterable[BookItem]) -> Iterator[Chapter]:
    """Yield chapters in document order, each before its sub-chapters."""
    for item in items:
        if isinstance(item, ChapterItem):
            yield item.chapter
            yield from iter_chapters(item.chapter.sub_items)


def fold_book(book: Book, settings: Settings = None) -> Book:
    """Fold every chapter in place; the first failure stops the walk and propagates.

    Chapters visited before a failing one keep their rewritten content.
    """
    settings = settings or Settings()
    count = 0
    for chapter in iter_chapters(book.sections):
        logger.debug("Folding chapter %r", chapter.name)
        try:
            chapter.content = fold_text(chapter.content, settings)
        except SerializationError as e:
            raise SerializationError(f"Failed to fold chapter {chapter.name!r}: {e}") from e
        count += 1
    logger.debug("Folded %d chapter(s)", count)
    return book


class FoldPreprocessor:
    """mdBook preprocessor turning #f/#q/#a markers into foldable blocks."""

    name = "foldaq"

    def __init__(self, settings: Settings = None):
        self.settings = settings

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        """Fold the book; without explicit settings, configuration comes from [preprocessor.foldaq] in ctx."""
        settings = self.settings or load_config(ctx.preprocessor_config(self.name))
        return fold_book(book, settings)

    def supports_renderer(self, renderer: str) -> bool:
        return renderer == SUPPORTED_RENDERER
