"""
SkyTracker Flask Application.

Main entry point for the web application. Initializes:
- Logging
- API routes
- Error handlers mapping upstream failures to HTTP responses

Usage:
    python -m skytracker.app

Or with gunicorn:
    gunicorn 'skytracker.app:create_app()'
"""

import logging

from flask import Flask
from flask_cors import CORS

from skytracker.api import aircraft_bp, flights_bp
from skytracker.config import config
from skytracker.errors import ResultTooLarge, UpstreamResponseInvalid, UpstreamUnavailable

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app() -> Flask:
    """
    Application factory for Flask.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(aircraft_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {
            'status': 'ok',
            'opensky_authenticated': config.opensky.is_authenticated,
        }

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(ResultTooLarge)
    def result_too_large(e):
        return {
            'error': str(e),
            'count': e.count,
            'max': e.max_results,
        }, 422

    @app.errorhandler(UpstreamUnavailable)
    def upstream_unavailable(e):
        logger.error(f'Upstream unavailable: {e}')
        return {'error': str(e)}, 502

    @app.errorhandler(UpstreamResponseInvalid)
    def upstream_response_invalid(e):
        logger.error(f'Upstream response invalid: {e}')
        return {'error': str(e)}, 502

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting SkyTracker on http://localhost:{config.port}')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
