# utils/corpus_loader.py
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Set

from models.bible import Verse

logger = logging.getLogger(__name__)

CORPUS_FIELD_COUNT = 6

# Optional sign and ASCII digits only: no padding, no underscores
INT_RE = re.compile(r'[+-]?[0-9]+')


@dataclass
class BookInfo:
    """Per-book metadata accumulated while reading the corpus"""
    abbreviation: str
    order: int
    chapters: Set[int] = field(default_factory=set)


@dataclass
class CorpusLoadResult:
    verses: List[Verse] = field(default_factory=list)
    books: Dict[str, BookInfo] = field(default_factory=dict)
    # False when the source could not be read at all
    readable: bool = True
    dropped: int = 0


def parse_int(value, default=0):
    if not INT_RE.fullmatch(value):
        return default
    return int(value)


def parse_corpus_lines(lines):
    """
    Parse tab-separated corpus records:

        bookName  abbreviation  canonicalOrder  chapter  verse  text

    Records with fewer than six fields are dropped. Bad numbers become 0.
    """
    result = CorpusLoadResult()

    for line in lines:
        parts = line.split('\t')
        if len(parts) < CORPUS_FIELD_COUNT:
            if line.strip():
                result.dropped += 1
            continue

        book_name, abbrev = parts[0], parts[1]
        verse = Verse(
            book_name=book_name,
            abbreviation=abbrev,
            book_order=parse_int(parts[2]),
            chapter=parse_int(parts[3]),
            verse=parse_int(parts[4]),
            text=parts[5],
        )
        result.verses.append(verse)

        info = result.books.get(book_name)
        if info is None:
            info = result.books[book_name] = BookInfo(abbreviation=abbrev, order=verse.book_order)
        info.chapters.add(verse.chapter)

    return result


def load_corpus(path):
    """Read and parse the corpus file. An unreadable file yields an empty result."""
    logger.info(f"Loading corpus from {path}")
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read corpus file {path}: {e}")
        return CorpusLoadResult(readable=False)

    result = parse_corpus_lines(data.splitlines())
    logger.info(f"Parsed {len(result.verses)} verses in {len(result.books)} books from {path}")
    if result.dropped:
        logger.debug(f"Dropped {result.dropped} malformed corpus records")
    return result
