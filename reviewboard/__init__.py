from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from reviewboard.config import Settings
from reviewboard.errors import ReviewboardError
from reviewboard.logging_setup import configure_logging

load_dotenv()


def create_app(config_name='development', settings=None, review_provider=None, places_client=None):
    """Create the Flask app.

    settings defaults to Settings.from_env(); review_provider and
    places_client default to the ones the settings describe.
    """
    from reviewboard.services.google_places import GooglePlacesClient
    from reviewboard.services.review_provider import build_review_provider

    if settings is None:
        settings = Settings.from_env()

    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config['TESTING'] = config_name == 'testing'
    app.json.sort_keys = False

    CORS(app, origins=list(settings.cors_origins))

    app.extensions['reviewboard'] = {
        'settings': settings,
        'review_provider': review_provider or build_review_provider(settings),
        'places_client': places_client or GooglePlacesClient(
            settings.google_places_api_key, timeout=settings.http_timeout
        ),
    }

    from reviewboard.routes import register_routes
    register_routes(app)

    @app.errorhandler(ReviewboardError)
    def handle_reviewboard_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'status': 'error', 'message': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception(f'Unhandled error: {e}')
        return jsonify({'status': 'error', 'message': 'Internal server error'}), 500

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
