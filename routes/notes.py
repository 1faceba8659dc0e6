from flask import Blueprint, request, jsonify
from database import get_db_session
from repositories import note_repo
from routes import int_arg
from schemas import parse_payload
from schemas.note_schemas import NoteCreate, NoteUpdate, NoteRead
from utils.auth import token_required
import logging

notes_bp = Blueprint('notes', __name__)
logger = logging.getLogger(__name__)


def _note_json(note):
    return NoteRead.model_validate(note).model_dump(mode='json', by_alias=True)


@notes_bp.route('/notes', methods=['GET'])
@token_required
def get_notes(current_user):
    book = request.args.get('book') or None
    chapter, error = int_arg('chapter')
    if error:
        return jsonify({'error': error}), 400
    verse, error = int_arg('verse')
    if error:
        return jsonify({'error': error}), 400

    try:
        with get_db_session() as db:
            notes = note_repo.list(db, current_user, book=book, chapter=chapter, verse=verse)
            return jsonify({'notes': [_note_json(n) for n in notes]}), 200
    except Exception as e:
        logger.error(f"Error fetching notes: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch notes'}), 500


@notes_bp.route('/notes', methods=['POST'])
@token_required
def create_note(current_user):
    payload, error = parse_payload(NoteCreate, request.get_json(silent=True))
    if error:
        return jsonify(error), 400

    try:
        with get_db_session() as db:
            note = note_repo.create(db, current_user, **payload.model_dump())
            response_data = _note_json(note)
        return jsonify(response_data), 201
    except Exception as e:
        logger.error(f"Error creating note for user {current_user}, ref {payload.book} {payload.chapter}:{payload.verse}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create note'}), 500


@notes_bp.route('/notes/<note_id>', methods=['GET'])
@token_required
def get_note(current_user, note_id):
    try:
        with get_db_session() as db:
            note = note_repo.get(db, current_user, note_id)
            if not note:
                return jsonify({'error': 'Note not found'}), 404
            return jsonify(_note_json(note)), 200
    except Exception as e:
        logger.error(f"Error fetching note {note_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch note'}), 500


@notes_bp.route('/notes/<note_id>', methods=['PATCH'])
@token_required
def update_note(current_user, note_id):
    payload, error = parse_payload(NoteUpdate, request.get_json(silent=True))
    if error:
        return jsonify(error), 400

    try:
        with get_db_session() as db:
            updated = note_repo.update(db, current_user, note_id, payload.model_dump(exclude_unset=True, exclude_none=True))
        if updated == 0:
            return jsonify({'error': 'Note not found or nothing updated'}), 404
        return jsonify({'message': 'Updated successfully'}), 200
    except Exception as e:
        logger.error(f"Error updating note {note_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update note'}), 500


@notes_bp.route('/notes/<note_id>', methods=['DELETE'])
@token_required
def delete_note(current_user, note_id):
    try:
        with get_db_session() as db:
            deleted = note_repo.delete(db, current_user, note_id)
        if deleted == 0:
            return jsonify({'error': 'Note not found'}), 404
        return jsonify({'message': 'Deleted successfully'}), 200
    except Exception as e:
        logger.error(f"Error deleting note {note_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete note'}), 500
