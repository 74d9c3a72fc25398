from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

# New Testament starts at Matthew
NEW_TESTAMENT_START_ORDER = 47


class Testament(str, Enum):
    OLD = 'Old Testament'
    NEW = 'New Testament'

    @classmethod
    def for_order(cls, order):
        return cls.NEW if order >= NEW_TESTAMENT_START_ORDER else cls.OLD


def make_verse_id(book_name, chapter, verse):
    """Build the opaque verse id ("Book:Chapter:Verse") used by lookups and bookmarks"""
    return f"{book_name}:{chapter}:{verse}"


@dataclass(frozen=True)
class Verse:
    book_name: str
    abbreviation: str
    book_order: int
    chapter: int
    verse: int
    text: str
    text_lower: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'text_lower', self.text.lower())

    @property
    def id(self):
        return make_verse_id(self.book_name, self.chapter, self.verse)

    @property
    def reference(self):
        return f"{self.book_name} {self.chapter}:{self.verse}"

    @property
    def short_reference(self):
        return f"{self.abbreviation} {self.chapter}:{self.verse}"


@dataclass(frozen=True)
class Book:
    name: str
    abbreviation: str
    order: int
    chapters: Tuple[int, ...]
    testament: Testament

    @property
    def chapter_count(self):
        return len(self.chapters)
