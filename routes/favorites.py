# routes/favorites.py
from flask import Blueprint, request, jsonify
from database import get_db_session
from repositories import favorite_repo
from routes import int_arg
from schemas import parse_payload
from schemas.favorite_schemas import FavoriteCreate, FavoriteUpdate, FavoriteRead
from utils.auth import token_required
import logging

logger = logging.getLogger(__name__)
favorites_bp = Blueprint('favorites', __name__)


def _favorite_json(favorite):
    return FavoriteRead.model_validate(favorite).model_dump(mode='json', by_alias=True)


@favorites_bp.route('/favorites', methods=['GET'])
@token_required
def get_favorites(current_user_id):
    book = request.args.get('book') or None
    chapter, error = int_arg('chapter')
    if error:
        return jsonify({"error": error}), 400

    try:
        with get_db_session() as db:
            favorites = favorite_repo.list(db, current_user_id, book=book, chapter=chapter)
            return jsonify({"verses": [_favorite_json(f) for f in favorites]}), 200
    except Exception as e:
        logger.error(f"Error fetching favorites for user {current_user_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch favorites"}), 500


@favorites_bp.route('/favorites', methods=['POST'])
@token_required
def create_favorite(current_user_id):
    payload, error = parse_payload(FavoriteCreate, request.get_json(silent=True))
    if error:
        return jsonify(error), 400

    try:
        with get_db_session() as db:
            favorite = favorite_repo.create(db, current_user_id, **payload.model_dump())
            response_data = _favorite_json(favorite)
        logger.info(f"User {current_user_id} favorited {payload.book} {payload.chapter}:{payload.verse_number}")
        return jsonify(response_data), 201
    except Exception as e:
        logger.error(f"Error creating favorite: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to create favorite"}), 500


@favorites_bp.route('/favorites/<favorite_id>', methods=['GET'])
@token_required
def get_favorite(current_user_id, favorite_id):
    try:
        with get_db_session() as db:
            favorite = favorite_repo.get(db, current_user_id, favorite_id)
            if not favorite:
                return jsonify({"error": "Favorite not found"}), 404
            return jsonify(_favorite_json(favorite)), 200
    except Exception as e:
        logger.error(f"Error fetching favorite {favorite_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch favorite"}), 500


@favorites_bp.route('/favorites/<favorite_id>', methods=['PATCH'])
@token_required
def update_favorite(current_user_id, favorite_id):
    payload, error = parse_payload(FavoriteUpdate, request.get_json(silent=True))
    if error:
        return jsonify(error), 400

    try:
        with get_db_session() as db:
            updated = favorite_repo.update(db, current_user_id, favorite_id, payload.model_dump(exclude_unset=True, exclude_none=True))
        if updated == 0:
            return jsonify({"error": "Favorite not found or nothing updated"}), 404
        return jsonify({"message": "Updated successfully"}), 200
    except Exception as e:
        logger.error(f"Error updating favorite {favorite_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to update favorite"}), 500


@favorites_bp.route('/favorites/<favorite_id>', methods=['DELETE'])
@token_required
def delete_favorite(current_user_id, favorite_id):
    try:
        with get_db_session() as db:
            deleted = favorite_repo.delete(db, current_user_id, favorite_id)
        if deleted == 0:
            return jsonify({"error": "Favorite not found"}), 404
        return jsonify({"message": "Deleted successfully"}), 200
    except Exception as e:
        logger.error(f"Error deleting favorite {favorite_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to delete favorite"}), 500
