from pydantic import BaseModel, ConfigDict
from typing import List

from models.bible import Testament
from models.commentary import CommentarySource


class VerseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    book_name: str
    abbreviation: str
    book_order: int
    chapter: int
    verse: int
    text: str
    reference: str
    short_reference: str


class BookRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    abbreviation: str
    order: int
    chapters: List[int]
    chapter_count: int
    testament: Testament


class SearchResults(BaseModel):
    query: str
    limit: int
    count: int
    truncated: bool  # True when the limit cut the scan short
    results: List[VerseRead]


class SourceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    source: CommentarySource
    display_name: str
    short_name: str
    description: str

    @classmethod
    def from_source(cls, source):
        return cls(
            source=source,
            display_name=source.display_name,
            short_name=source.short_name,
            description=source.description,
        )


class CommentaryEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    source: CommentarySource
    abbreviation: str
    chapter: int
    verse: int
    text: str


class CommentaryGroupRead(SourceRead):
    entries: List[CommentaryEntryRead]


def dump_verse(verse):
    return VerseRead.model_validate(verse).model_dump(mode='json')


def dump_book(book):
    return BookRead.model_validate(book).model_dump(mode='json')


def dump_commentary_group(source, entries):
    source_info = SourceRead.from_source(source)
    group = CommentaryGroupRead(
        **source_info.model_dump(),
        entries=[CommentaryEntryRead.model_validate(entry) for entry in entries],
    )
    return group.model_dump(mode='json')
