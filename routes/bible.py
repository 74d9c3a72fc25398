# routes/bible.py
from flask import Blueprint, jsonify, request, current_app
import logging

from database import CORPUS_LOADING, CORPUS_UNAVAILABLE, get_db
from models.bible import make_verse_id
from schemas.bible_schemas import SearchResults, VerseRead, dump_book, dump_verse

bible_bp = Blueprint('bible', __name__)

logger = logging.getLogger(__name__)


def corpus_unready_response(bible):
    """503 response while the corpus is loading or could not be read, else None"""
    state = bible.state()
    if state == CORPUS_LOADING:
        return jsonify({"error": "Corpus is still loading", "state": state}), 503
    if state == CORPUS_UNAVAILABLE:
        return jsonify({"error": "Corpus could not be loaded", "state": state}), 503
    return None


@bible_bp.route('/books', methods=['GET'])
def get_books():
    try:
        bible = get_db().bible
        unready = corpus_unready_response(bible)
        if unready:
            return unready

        books = bible.books_ordered_by_canon()
        logger.info(f"Returning {len(books)} books")
        return jsonify([dump_book(book) for book in books])
    except Exception as e:
        logger.error(f"Error in get_books: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@bible_bp.route('/chapters/<book>', methods=['GET'])
def get_chapters(book):
    try:
        bible = get_db().bible
        unready = corpus_unready_response(bible)
        if unready:
            return unready

        book_obj = bible.book(book)
        if not book_obj:
            return jsonify({"error": "Book not found"}), 404

        return jsonify(list(book_obj.chapters))
    except Exception as e:
        logger.error(f"Error in get_chapters: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@bible_bp.route('/verses/<book>/<int:chapter>', methods=['GET'])
def get_verses(book, chapter):
    try:
        bible = get_db().bible
        unready = corpus_unready_response(bible)
        if unready:
            return unready

        verses = bible.verses_in_chapter(book, chapter)
        if not verses:
            return jsonify({"error": "Chapter not found"}), 404

        return jsonify([dump_verse(verse) for verse in verses])
    except Exception as e:
        logger.error(f"Error in get_verses: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@bible_bp.route('/verse/<book>/<int:chapter>/<int:verse>', methods=['GET'])
def get_single_verse(book, chapter, verse):
    try:
        bible = get_db().bible
        unready = corpus_unready_response(bible)
        if unready:
            return unready

        verse_obj = bible.verse_by_id(make_verse_id(book, chapter, verse))
        if not verse_obj:
            return jsonify({"error": "Verse not found"}), 404

        return jsonify(dump_verse(verse_obj))
    except Exception as e:
        logger.error(f"Error in get_single_verse: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@bible_bp.route('/verse', methods=['GET'])
def get_verse_by_id():
    """Look up a verse by its opaque id, e.g. ?id=Genesis:1:1"""
    verse_id = request.args.get('id', '')
    if not verse_id:
        return jsonify({"error": "Missing id parameter"}), 400

    try:
        bible = get_db().bible
        unready = corpus_unready_response(bible)
        if unready:
            return unready

        verse_obj = bible.verse_by_id(verse_id)
        if not verse_obj:
            return jsonify({"error": "Verse not found"}), 404

        return jsonify(dump_verse(verse_obj))
    except Exception as e:
        logger.error(f"Error in get_verse_by_id: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@bible_bp.route('/verses', methods=['GET'])
def get_verses_by_ids():
    """Resolve a set of verse ids (?id=..&id=..), as saved by a bookmark list"""
    verse_ids = request.args.getlist('id')
    try:
        bible = get_db().bible
        unready = corpus_unready_response(bible)
        if unready:
            return unready

        verses = bible.verses_by_ids(verse_ids)
        return jsonify([dump_verse(verse) for verse in verses])
    except Exception as e:
        logger.error(f"Error in get_verses_by_ids: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@bible_bp.route('/search', methods=['GET'])
def search_bible():
    query_str = request.args.get('q', '')
    default_limit = current_app.config['SEARCH_LIMIT']
    max_limit = current_app.config['MAX_SEARCH_LIMIT']

    try:
        limit = int(request.args.get('limit', default_limit))
    except ValueError:
        limit = 0
    if limit < 1 or limit > max_limit:
        return jsonify({"error": f"limit must be between 1 and {max_limit}"}), 400

    try:
        # One extra hit tells us whether the limit truncated the results
        verses = get_db().bible.search(query_str, limit + 1)
        truncated = len(verses) > limit
        verses = verses[:limit]
        logger.info(f"Search {query_str!r} returned {len(verses)} verses")

        results = SearchResults(
            query=query_str,
            limit=limit,
            count=len(verses),
            truncated=truncated,
            results=[VerseRead.model_validate(verse) for verse in verses],
        )
        return jsonify(results.model_dump(mode='json'))
    except Exception as e:
        logger.error(f"Search error: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500
