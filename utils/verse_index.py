# utils/verse_index.py
from models.bible import Book, Testament


class VerseIndex:
    """
    Immutable lookup structures over one corpus load.

    - chapters: book name -> chapter -> verses ascending by verse number
    - by_id:    verse id -> verse
    - books:    books ascending by canonical order
    - verses:   every verse in source order (the search corpus)

    Instances are never modified after build(); a new load produces a new index.
    """

    def __init__(self, verses=(), chapters=None, by_id=None, books=()):
        self.verses = tuple(verses)
        self._chapters = chapters or {}
        self._by_id = by_id or {}
        self.books = tuple(books)
        self._books_by_name = {book.name: book for book in self.books}

    @classmethod
    def build(cls, load_result):
        chapters = {}
        by_id = {}
        for verse in load_result.verses:
            chapters.setdefault(verse.book_name, {}).setdefault(verse.chapter, []).append(verse)
            # Duplicate ids: the later record wins
            by_id[verse.id] = verse

        # Source order is not trusted within a chapter
        frozen_chapters = {
            book_name: {
                chapter: tuple(sorted(verses, key=lambda v: v.verse))
                for chapter, verses in book_chapters.items()
            }
            for book_name, book_chapters in chapters.items()
        }

        books = sorted(
            (
                Book(
                    name=name,
                    abbreviation=info.abbreviation,
                    order=info.order,
                    chapters=tuple(sorted(info.chapters)),
                    testament=Testament.for_order(info.order),
                )
                for name, info in load_result.books.items()
            ),
            key=lambda b: b.order,
        )

        return cls(
            verses=load_result.verses,
            chapters=frozen_chapters,
            by_id=by_id,
            books=books,
        )

    def __len__(self):
        return len(self.verses)

    def verses_in_chapter(self, book_name, chapter):
        return self._chapters.get(book_name, {}).get(chapter, ())

    def verse_by_id(self, verse_id):
        return self._by_id.get(verse_id)

    def book(self, name):
        return self._books_by_name.get(name)


EMPTY_INDEX = VerseIndex()
