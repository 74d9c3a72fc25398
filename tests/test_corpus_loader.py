#!/usr/bin/env python3
import tempfile
import unittest
from pathlib import Path

from utils.corpus_loader import load_corpus, parse_corpus_lines

DATA_DIR = Path(__file__).resolve().parent / "data"


class CorpusLoaderTests(unittest.TestCase):
    def test_parses_a_single_record(self):
        result = parse_corpus_lines(["Genesis\tGen\t1\t1\t1\tIn the beginning..."])
        self.assertEqual(len(result.verses), 1)
        verse = result.verses[0]
        self.assertEqual(verse.id, "Genesis:1:1")
        self.assertEqual(verse.reference, "Genesis 1:1")
        self.assertEqual(verse.short_reference, "Gen 1:1")
        self.assertEqual(verse.book_order, 1)
        self.assertEqual(verse.text_lower, "in the beginning...")

    def test_short_records_are_dropped(self):
        result = parse_corpus_lines([
            "Genesis\tGen\t1\t1",
            "",
            "Genesis\tGen\t1\t1\t1\tIn the beginning...",
        ])
        self.assertEqual([v.id for v in result.verses], ["Genesis:1:1"])
        self.assertEqual(result.dropped, 1)

    def test_bad_numbers_default_to_zero(self):
        result = parse_corpus_lines(["Matthew\tMt\tx\tthree\t10\tFor now the axe..."])
        verse = result.verses[0]
        self.assertEqual(verse.book_order, 0)
        self.assertEqual(verse.chapter, 0)
        self.assertEqual(verse.verse, 10)

    def test_numbers_must_be_plain_digits(self):
        result = parse_corpus_lines(["Genesis\tGen\t+1\t 2 \t1_0\tText"])
        verse = result.verses[0]
        self.assertEqual(verse.book_order, 1)
        self.assertEqual(verse.chapter, 0)
        self.assertEqual(verse.verse, 0)

    def test_extra_fields_are_ignored(self):
        result = parse_corpus_lines(["Genesis\tGen\t1\t1\t1\tText\textra"])
        self.assertEqual(result.verses[0].text, "Text")

    def test_book_info_accumulates_distinct_chapters(self):
        result = parse_corpus_lines([
            "Genesis\tGen\t1\t2\t1\ta",
            "Genesis\tGen\t1\t1\t1\tb",
            "Genesis\tGen\t1\t2\t2\tc",
        ])
        info = result.books["Genesis"]
        self.assertEqual(info.abbreviation, "Gen")
        self.assertEqual(info.order, 1)
        self.assertEqual(info.chapters, {1, 2})

    def test_load_corpus_keeps_source_order(self):
        result = load_corpus(DATA_DIR / "drb.tsv")
        self.assertTrue(result.readable)
        self.assertEqual(len(result.verses), 10)
        self.assertEqual(result.verses[0].id, "Genesis:1:2")
        self.assertEqual(result.verses[-1].id, "Matthew:0:10")
        self.assertEqual(set(result.books), {"Genesis", "2 Machabees", "Matthew"})

    def test_missing_file_yields_empty_result(self):
        result = load_corpus(DATA_DIR / "does-not-exist.tsv")
        self.assertFalse(result.readable)
        self.assertEqual(result.verses, [])
        self.assertEqual(result.books, {})

    def test_byte_order_mark_is_not_part_of_the_book_name(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bom.tsv"
            path.write_text("\ufeffGenesis\tGen\t1\t1\t1\tIn the beginning...\n", encoding="utf-8")
            result = load_corpus(path)
        self.assertEqual(result.verses[0].id, "Genesis:1:1")
        self.assertEqual(set(result.books), {"Genesis"})


if __name__ == "__main__":
    unittest.main()
