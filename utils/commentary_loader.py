# utils/commentary_loader.py
import logging

from models.commentary import CommentaryEntry, make_commentary_key
from utils.corpus_loader import INT_RE

logger = logging.getLogger(__name__)

HEADER_SENTINELS = {'book', 'bookabbrev'}
COMMENTARY_FIELD_COUNT = 3


def parse_reference(ref):
    """Parse "chapter:verse" into (chapter, verse), or None if malformed"""
    parts = ref.split(':')
    if len(parts) != 2:
        return None
    if not all(INT_RE.fullmatch(part) for part in parts):
        return None
    return int(parts[0]), int(parts[1])


def parse_commentary_lines(source, lines):
    """
    Parse tab-separated annotation records for one source:

        abbreviation  chapter:verse  text

    Returns a dict of "abbrev:chapter:verse" -> [CommentaryEntry, ...].
    """
    result = {}
    dropped = 0

    for index, line in enumerate(lines):
        parts = line.split('\t')
        if len(parts) < COMMENTARY_FIELD_COUNT:
            if line.strip():
                dropped += 1
            continue

        abbrev, verse_ref, text = parts[0], parts[1], parts[2]

        if index == 0 and abbrev.lower() in HEADER_SENTINELS:
            continue

        ref = parse_reference(verse_ref)
        if ref is None:
            dropped += 1
            continue
        chapter, verse = ref

        entry = CommentaryEntry(
            source=source,
            abbreviation=abbrev,
            chapter=chapter,
            verse=verse,
            text=text,
        )
        result.setdefault(make_commentary_key(abbrev, chapter, verse), []).append(entry)

    if dropped:
        logger.debug(f"Dropped {dropped} malformed {source.value} records")
    return result


def commentary_path(directory, source):
    return directory / f"{source.filename}.tsv"


def load_commentary(source, directory):
    """Read and parse one commentary source. An unreadable file yields no entries."""
    path = commentary_path(directory, source)
    logger.info(f"Loading {source.display_name} commentary from {path}")
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read commentary file {path}: {e}")
        return {}

    result = parse_commentary_lines(source, data.splitlines())
    logger.info(f"Parsed {sum(len(v) for v in result.values())} {source.display_name} entries "
                f"for {len(result)} verses")
    return result
