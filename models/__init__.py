# This file makes the models directory a Python package
from .bible import Verse, Book, Testament, make_verse_id
from .commentary import (
    CommentarySource,
    CommentaryEntry,
    SourceInfo,
    SOURCE_INFO,
    EAGER_SOURCES,
    LAZY_SOURCES,
    make_commentary_key,
)

__all__ = [
    'Verse',
    'Book',
    'Testament',
    'make_verse_id',
    'CommentarySource',
    'CommentaryEntry',
    'SourceInfo',
    'SOURCE_INFO',
    'EAGER_SOURCES',
    'LAZY_SOURCES',
    'make_commentary_key',
]
