"""mdBook preprocessor protocol models: context, book, and book items"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# mdBook release whose preprocessor protocol these models follow.
MDBOOK_VERSION = "0.4.40"


class PreprocessorContext(BaseModel):
    """Build context mdBook sends alongside the book."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    root:           str = ""
    book_config:    dict[str, Any] = Field(default_factory=dict, alias="config")
    renderer:       str = ""
    mdbook_version: str = ""

    def preprocessor_config(self, name: str) -> dict[str, Any]:
        """Return the [preprocessor.<name>] table from book.toml, or {}."""
        table = self.book_config.get("preprocessor", {}).get(name, {})
        return table if isinstance(table, dict) else {}


class Chapter(BaseModel):
    """A book node carrying renderable markdown content."""
    model_config = ConfigDict(extra="allow")

    name:         str
    content:      str = ""
    number:       Optional[list[int]] = None
    sub_items:    list[BookItem] = Field(default_factory=list)
    path:         Optional[str] = None          # None for draft chapters
    source_path:  Optional[str] = None
    parent_names: list[str] = Field(default_factory=list)


class ChapterItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chapter: Chapter = Field(alias="Chapter")


class PartTitleItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    part_title: str = Field(alias="PartTitle")


BookItem = Union[ChapterItem, PartTitleItem, Literal["Separator"]]


class Book(BaseModel):
    """The ordered forest of book items; unknown keys round-trip untouched."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    sections:       list[BookItem] = Field(default_factory=list)
    non_exhaustive: None = Field(default=None, alias="__non_exhaustive")


Chapter.model_rebuild()
ChapterItem.model_rebuild()
Book.model_rebuild()

_INPUT_ADAPTER = TypeAdapter(tuple[PreprocessorContext, Book])


def parse_input(raw: str) -> tuple[PreprocessorContext, Book]:
    """Decode the [context, book] JSON array mdBook writes to a preprocessor's stdin."""
    return _INPUT_ADAPTER.validate_json(raw)


def dump_book(book: Book) -> str:
    """Encode the book in the same shape mdBook expects back on stdout."""
    return book.model_dump_json(by_alias=True)
