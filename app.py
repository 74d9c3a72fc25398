# app.py
from dotenv import load_dotenv

# Load environment variables before config reads them
load_dotenv()

from flask import Flask, jsonify, request, g
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
import logging
import os
import sys
import time

from config import Config
from database import (
    BibleDatabase, CORPUS_LOADING, CORPUS_READY, CORPUS_UNAVAILABLE, EXTENSION_KEY, get_db,
)
from routes.bible import bible_bp
from routes.commentary import commentary_bp

# Configure logging to output to stdout
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

HEALTH_BY_CORPUS_STATE = {
    CORPUS_LOADING: 'loading',
    CORPUS_READY: 'healthy',
    CORPUS_UNAVAILABLE: 'unavailable',
}


def create_app(test_config=None, database=None):
    """
    Build the Flask app and the BibleDatabase it serves.

    The database starts loading in the background immediately; requests are
    answered from whatever has been published so far.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    if database is None:
        database = BibleDatabase.from_config(app.config)
    app.extensions[EXTENSION_KEY] = database
    database.start()

    app.register_blueprint(bible_bp, url_prefix='/api/bible')
    app.register_blueprint(commentary_bp, url_prefix='/api/commentary')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - g.start_time
        logger.info(f"Request to {request.path} took {duration:.3f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check that reports corpus and commentary readiness"""
        status = get_db().status()
        return jsonify(dict(
            status,
            status=HEALTH_BY_CORPUS_STATE[status['corpus_state']],
            timestamp=time.time(),
        ))

    return app


if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    create_app().run(debug=True, port=port, use_reloader=False)
