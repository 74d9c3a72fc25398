from dataclasses import dataclass
from enum import Enum


class CommentarySource(str, Enum):
    # Declaration order is the display order for grouped results
    HAYDOCK = 'haydock'
    LAPIDE = 'lapide'
    DOUAI_1609 = 'douai-1609'

    @property
    def info(self):
        return SOURCE_INFO[self]

    @property
    def filename(self):
        return self.info.filename

    @property
    def display_name(self):
        return self.info.name

    @property
    def short_name(self):
        return self.info.short_name

    @property
    def description(self):
        return self.info.description


@dataclass(frozen=True)
class SourceInfo:
    filename: str
    name: str
    short_name: str
    description: str


SOURCE_INFO = {
    CommentarySource.HAYDOCK: SourceInfo(
        filename='haydock',
        name='Haydock',
        short_name='Haydock',
        description='Haydock Catholic Bible Commentary',
    ),
    CommentarySource.LAPIDE: SourceInfo(
        filename='lapide',
        name='Cornelius à Lapide',
        short_name='Lapide',
        description='Cornelius à Lapide (New Testament)',
    ),
    CommentarySource.DOUAI_1609: SourceInfo(
        filename='douai-1609',
        name='Douai 1609',
        short_name='Douai',
        description='Original Douai Annotations (1609)',
    ),
}

# Haydock is ~13MB / 36k lines, the others are a few thousand lines each
EAGER_SOURCES = (CommentarySource.DOUAI_1609, CommentarySource.LAPIDE)
LAZY_SOURCES = (CommentarySource.HAYDOCK,)


def make_commentary_key(abbreviation, chapter, verse):
    return f"{abbreviation}:{chapter}:{verse}"


@dataclass(frozen=True)
class CommentaryEntry:
    source: CommentarySource
    abbreviation: str
    chapter: int
    verse: int
    text: str

    @property
    def key(self):
        return make_commentary_key(self.abbreviation, self.chapter, self.verse)
