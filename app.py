# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from sqlalchemy import text
from werkzeug.middleware.proxy_fix import ProxyFix
import os
import logging
import time
import sys

from config import Config
from database import init_db, create_tables, get_db_session
from routes.ai import ai_bp
from routes.auth import auth_bp
from routes.bible import bible_bp
from routes.favorites import favorites_bp
from routes.notes import notes_bp
from utils.ai import BibleAssistant
from utils.scripture_client import ScriptureClient

# Configure logging to output to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Trust X-Forwarded-* from the platform proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False
    app.json.compact = True
    app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024

    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    logger.info("Initializing database connection...")
    init_db(app.config['DATABASE_URL'])
    if app.config['AUTO_CREATE_TABLES']:
        create_tables()

    app.extensions['scripture_client'] = ScriptureClient.from_config(app.config)
    app.extensions['bible_assistant'] = BibleAssistant.from_config(app.config)

    app.register_blueprint(favorites_bp, url_prefix='/api')
    app.register_blueprint(notes_bp, url_prefix='/api')
    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(ai_bp, url_prefix='/api')
    app.register_blueprint(bible_bp, url_prefix='/api/bible')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        start = g.get('start_time')
        if start is not None:
            logger.info(f"Request to {request.path} took {time.time() - start:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint that also verifies the database connection"""
        try:
            with get_db_session() as db:
                db.execute(text('SELECT 1'))
            return jsonify({
                'status': 'healthy',
                'database': 'connected',
                'timestamp': time.time()
            })
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({
                'status': 'unhealthy',
                'error': str(e),
                'timestamp': time.time()
            }), 500

    return app


if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    create_app().run(debug=True, port=port)
