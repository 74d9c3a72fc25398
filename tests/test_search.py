#!/usr/bin/env python3
import unittest
from pathlib import Path

from utils.corpus_loader import load_corpus
from utils.search import BibleSearchEngine

DATA_DIR = Path(__file__).resolve().parent / "data"


class CountingVerses:
    """Iterable over verses that records how many were handed out"""

    def __init__(self, verses):
        self.verses = verses
        self.consumed = 0

    def __iter__(self):
        for verse in self.verses:
            self.consumed += 1
            yield verse


class BibleSearchEngineTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.verses = load_corpus(DATA_DIR / "drb.tsv").verses
        cls.engine = BibleSearchEngine(cls.verses)

    def test_empty_query_returns_nothing(self):
        self.assertEqual(self.engine.search(""), [])

    def test_search_is_case_insensitive(self):
        lower = self.engine.search("abraham")
        upper = self.engine.search("ABRAHAM")
        self.assertEqual(lower, upper)
        self.assertEqual(
            [v.id for v in lower],
            ["Genesis:17:5", "Matthew:1:1", "Matthew:1:2", "Matthew:3:9"],
        )

    def test_book_name_matches(self):
        results = self.engine.search("machabees")
        self.assertEqual([v.id for v in results], ["2 Machabees:1:1"])

    def test_limit_keeps_first_matches_in_corpus_order(self):
        results = self.engine.search("abraham", limit=2)
        self.assertEqual([v.id for v in results], ["Genesis:17:5", "Matthew:1:1"])

    def test_non_positive_limit_returns_nothing(self):
        self.assertEqual(self.engine.search("abraham", limit=0), [])

    def test_scan_stops_at_limit(self):
        verses = CountingVerses(self.verses)
        results = BibleSearchEngine(verses).search("the", limit=1)
        self.assertEqual(len(results), 1)
        self.assertEqual(verses.consumed, 1)

    def test_no_punctuation_normalization(self):
        self.assertEqual(self.engine.search("god said be light"), [])
        self.assertEqual(len(self.engine.search("god said: be light")), 1)


if __name__ == "__main__":
    unittest.main()
