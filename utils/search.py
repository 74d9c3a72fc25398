# utils/search.py
from itertools import islice

DEFAULT_SEARCH_LIMIT = 100


class BibleSearchEngine:
    """Case-insensitive substring search over an ordered verse sequence"""

    def __init__(self, verses):
        self.verses = verses

    def matches(self, verse, lowered_query):
        return lowered_query in verse.text_lower or lowered_query in verse.book_name.lower()

    def text_search(self, query, limit=DEFAULT_SEARCH_LIMIT):
        """Return the first `limit` matching verses in corpus order"""
        if not query or limit <= 0:
            return []

        lowered = query.lower()
        hits = (verse for verse in self.verses if self.matches(verse, lowered))
        # islice stops the scan once the limit is reached
        return list(islice(hits, limit))

    def search(self, query, limit=DEFAULT_SEARCH_LIMIT):
        """Main search method"""
        return self.text_search(query, limit)
