# scripts/query_corpus.py
import argparse
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
backend_dir = current_dir.parent
sys.path.insert(0, str(backend_dir))

load_dotenv()

from config import Config
from database import BibleDatabase
from models.commentary import CommentarySource


def print_verses(verses):
    if not verses:
        print("No verses found.")
        return
    for verse in verses:
        print(f"{verse.reference}")
        print(f"    {verse.text}")


def cmd_books(db, args):
    for book in db.bible.books_ordered_by_canon():
        print(f"{book.order:3d}  {book.name} ({book.abbreviation}) - "
              f"{book.chapter_count} chapters, {book.testament.value}")


def cmd_chapter(db, args):
    print_verses(db.bible.verses_in_chapter(args.book, args.chapter))


def cmd_verse(db, args):
    verse = db.bible.verse_by_id(args.id)
    if verse is None:
        print(f"Verse {args.id!r} not found.")
        return 1
    print_verses([verse])


def cmd_search(db, args):
    verses = db.bible.search(args.query, args.limit)
    print(f"{len(verses)}{'+' if len(verses) >= args.limit else ''} results for {args.query!r}\n")
    print_verses(verses)


def cmd_commentary(db, args):
    # The lazy source has to be committed before the lookup to be complete
    db.commentary.ensure_loaded(CommentarySource.HAYDOCK).result()
    groups = db.commentary.commentaries_by_source(args.abbrev, args.chapter, args.verse)
    if not groups:
        print("No commentary for this verse.")
        return
    for source, entries in groups:
        print(f"== {source.display_name} ==")
        for entry in entries:
            print(f"    {entry.text}")


def build_parser():
    parser = argparse.ArgumentParser(description="Query the Douay-Rheims corpus from the command line")
    parser.add_argument("--corpus", type=Path, default=Config.CORPUS_FILE, help="Corpus TSV file")
    parser.add_argument("--commentary-dir", type=Path, default=Config.COMMENTARY_DIR,
                        help="Directory holding the commentary TSV files")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("books", help="List books in canonical order").set_defaults(func=cmd_books)

    p = sub.add_parser("chapter", help="Print a chapter")
    p.add_argument("book")
    p.add_argument("chapter", type=int)
    p.set_defaults(func=cmd_chapter)

    p = sub.add_parser("verse", help="Print a verse by id (Book:Chapter:Verse)")
    p.add_argument("id")
    p.set_defaults(func=cmd_verse)

    p = sub.add_parser("search", help="Case-insensitive substring search")
    p.add_argument("query")
    p.add_argument("--limit", type=int, default=Config.SEARCH_LIMIT)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("commentary", help="Print commentary for a verse")
    p.add_argument("abbrev")
    p.add_argument("chapter", type=int)
    p.add_argument("verse", type=int)
    p.set_defaults(func=cmd_commentary)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    db = BibleDatabase(args.corpus, args.commentary_dir, workers=Config.LOADER_WORKERS)
    db.start()
    db.wait_until_ready()
    try:
        if not db.bible.is_loaded():
            print(f"Warning: corpus {args.corpus} could not be loaded")
        return args.func(db, args) or 0
    finally:
        db.shutdown()


if __name__ == '__main__':
    sys.exit(main())
