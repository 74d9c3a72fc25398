# routes/commentary.py
from flask import Blueprint, jsonify
import logging

from database import get_db
from models.commentary import CommentarySource
from schemas.bible_schemas import SourceRead, dump_commentary_group

logger = logging.getLogger(__name__)
commentary_bp = Blueprint('commentary', __name__)


@commentary_bp.route('/sources', methods=['GET'])
def get_sources():
    try:
        loaded = set(get_db().commentary.loaded_sources())
        return jsonify([
            dict(SourceRead.from_source(source).model_dump(mode='json'), loaded=source in loaded)
            for source in CommentarySource
        ])
    except Exception as e:
        logger.error(f"Error in get_sources: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@commentary_bp.route('/<abbrev>/<int:chapter>/<int:verse>', methods=['GET'])
def get_commentary(abbrev, chapter, verse):
    """
    Commentary for one verse, grouped by source. The first call also starts
    loading Haydock, so early responses may be missing its notes; `pending`
    lists the sources not yet committed.
    """
    try:
        commentary = get_db().commentary
        groups = commentary.commentaries_by_source(abbrev, chapter, verse)
        loaded = set(commentary.loaded_sources())

        return jsonify({
            "abbreviation": abbrev,
            "chapter": chapter,
            "verse": verse,
            "sources": [dump_commentary_group(source, entries) for source, entries in groups],
            "pending": [source.value for source in CommentarySource if source not in loaded],
        })
    except Exception as e:
        logger.error(f"Error fetching commentary for {abbrev} {chapter}:{verse}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch commentary"}), 500


@commentary_bp.route('/<abbrev>/<int:chapter>/<int:verse>/sources', methods=['GET'])
def get_available_sources(abbrev, chapter, verse):
    try:
        commentary = get_db().commentary
        return jsonify({
            "has_commentary": commentary.has_commentary(abbrev, chapter, verse),
            "sources": [source.value for source in commentary.available_sources(abbrev, chapter, verse)],
        })
    except Exception as e:
        logger.error(f"Error fetching commentary sources for {abbrev} {chapter}:{verse}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch commentary sources"}), 500
