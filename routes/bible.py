# routes/bible.py
from flask import Blueprint, jsonify, request, current_app
import logging

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)


def _client():
    return current_app.extensions['scripture_client']


@bible_bp.route('/verse-of-the-day', methods=['GET'])
def get_verse_of_the_day():
    verse = _client().fetch_verse_of_the_day()
    if not verse:
        return jsonify({"error": "Failed to load Verse of the Day. Please try again later."}), 404
    return jsonify(verse.to_json())


@bible_bp.route('/verse', methods=['GET'])
def get_verse():
    reference = request.args.get('reference', '').strip()
    if not reference:
        return jsonify({"error": "A verse reference is required"}), 400

    verse = _client().fetch_verse(reference, version=request.args.get('version', 'web'))
    if not verse:
        return jsonify({"error": "Verse not found"}), 404
    return jsonify(verse.to_json())


@bible_bp.route('/chapter/<book>/<int:chapter>', methods=['GET'])
def get_chapter(book, chapter):
    result = _client().fetch_chapter(book, chapter, version=request.args.get('version', 'web'))
    if not result:
        logger.info(f"No provider returned {book} {chapter}")
        return jsonify({"error": "Chapter not found"}), 404
    return jsonify(result.to_json())


@bible_bp.route('/books', methods=['GET'])
def get_books():
    books = _client().fetch_books(language=request.args.get('language', 'en'))
    return jsonify({"books": [b.to_json() for b in books]})


@bible_bp.route('/search', methods=['GET'])
def search_bible():
    query_str = request.args.get('q', '')
    if not query_str.strip():
        return jsonify({"results": []})

    results = _client().search(query_str, version=request.args.get('version', 'kjv'))
    return jsonify({"results": [r.to_json() for r in results]})
