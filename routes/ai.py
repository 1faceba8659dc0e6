# routes/ai.py
from flask import Blueprint, jsonify, request, current_app
import logging

import anthropic

from utils.ai import AssistantConfigError

ai_bp = Blueprint('ai', __name__)
logger = logging.getLogger(__name__)


@ai_bp.route('/ai', methods=['POST'])
def ask_assistant():
    data = request.get_json(silent=True) or {}
    prompt = data.get('prompt') if isinstance(data, dict) else None

    if not isinstance(prompt, str) or not prompt.strip():
        return jsonify({"error": "Invalid or missing prompt."}), 400

    try:
        answer = current_app.extensions['bible_assistant'].answer(prompt)
    except AssistantConfigError as e:
        logger.error(f"AI assistant configuration error: {e}")
        return jsonify({"error": "Failed to generate a response."}), 500
    except anthropic.APIError as api_err:
        logger.error(f"Anthropic API error: {api_err}", exc_info=True)
        return jsonify({"error": "Failed to generate a response."}), 500

    return jsonify({"answer": answer})
