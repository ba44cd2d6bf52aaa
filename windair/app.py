"""
Wind Airways Flask Application.

Main entry point for the API proxy. Initializes:
- Upstream gateway and response cache
- CORS allow-list and rate limiting
- API routes
- Static frontend serving

Usage:
    python -m windair.app

Or with gunicorn:
    gunicorn "windair.app:create_app()"
"""

import logging
import signal
import sys
from typing import Optional

from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from windair.api import airline_bp, flights_bp, pilots_bp, system_bp
from windair.cache import ResponseCache
from windair.config import AppConfig, config
from windair.errors import ProxyError
from windair.services import NewskyGateway, Services

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    app_config: Optional[AppConfig] = None,
    gateway: Optional[NewskyGateway] = None,
    cache: Optional[ResponseCache] = None,
    start_background: bool = True,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        app_config: Configuration; defaults to the environment-loaded config.
        gateway: Upstream client; built from app_config when omitted.
        cache: Response cache; a fresh one per app when omitted.
        start_background: Whether to start the cache sweeper thread.
                          Set to False for testing.

    Returns:
        Configured Flask application instance.
    """
    app_config = app_config or config

    app = Flask(
        __name__,
        static_folder='../frontend',
        static_url_path='',
    )
    app.config['DEBUG'] = app_config.debug

    allowed_origins = set(app_config.allowed_origins)

    # CORS headers for API endpoints; disallowed origins are refused below
    CORS(
        app,
        resources={r'/api/*': {'origins': sorted(allowed_origins)}},
        methods=['GET', 'POST'],
        supports_credentials=True,
    )

    services = Services(
        config=app_config,
        cache=cache if cache is not None else ResponseCache(default_ttl=app_config.cache.ttl_seconds),
        gateway=gateway if gateway is not None else NewskyGateway.from_config(app_config.newsky),
        limiter=Limiter(
            get_remote_address,
            enabled=app_config.rate_limit.enabled,
            storage_uri='memory://',
        ),
    )
    app.extensions['windair'] = services

    if start_background:
        services.cache.start_sweeper(app_config.cache.check_period_seconds)

    # Register API blueprints; all of them draw on one per-client budget
    for blueprint in (system_bp, flights_bp, pilots_bp, airline_bp):
        if app_config.rate_limit.enabled:
            services.limiter.shared_limit(app_config.rate_limit.limit_string, scope='api')(blueprint)
        app.register_blueprint(blueprint)

    # -------------------------------------------------------------------------
    # Request guards
    # -------------------------------------------------------------------------

    @app.before_request
    def log_request():
        logger.info(f'{request.method} {request.full_path.rstrip("?")}')

    @app.before_request
    def reject_unknown_origin():
        """Refuse cross-origin requests from origins not on the allow-list."""
        origin = request.headers.get('Origin')
        if not origin:
            return None
        origin = origin.rstrip('/')
        if origin in allowed_origins or origin == request.host_url.rstrip('/'):
            return None
        logger.warning(f'Rejected request from origin {origin}')
        return jsonify({'success': False, 'error': 'Origin not allowed'}), 403

    # Rate limit check runs after the guards above
    services.limiter.init_app(app)

    # -------------------------------------------------------------------------
    # Frontend routes
    # -------------------------------------------------------------------------

    @app.route('/')
    def index():
        """Serve the frontend entry page."""
        return send_from_directory(app.static_folder, 'index.html')

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(ProxyError)
    def proxy_error(e):
        return jsonify(e.to_dict()), e.status_code

    # The static catch-all only answers GET, so any other method on an
    # unknown path surfaces as 405; both are reported as a missing route.
    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(e):
        return jsonify({'success': False, 'error': 'Route not found'}), 404

    @app.errorhandler(429)
    def rate_limited(e):
        logger.warning(f'Rate limit exceeded for {get_remote_address()}: {e.description}')
        return jsonify({
            'success': False,
            'error': 'Too many requests, please try again later.',
        }), 429

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'success': False, 'error': e.name}), e.code

    @app.errorhandler(Exception)
    def server_error(e):
        logger.exception(f'Unhandled error: {e}')
        body = {'success': False, 'error': 'Internal server error'}
        if app_config.is_development:
            body['message'] = str(e)
        return jsonify(body), 500

    return app


def shutdown(services: Services) -> None:
    """Stop background work and flush the cache."""
    services.cache.stop_sweeper()
    removed = services.cache.clear()
    logger.info(f'Cache flushed on shutdown ({removed} entries)')


def install_signal_handlers(app: Flask) -> None:
    """Flush the cache and exit cleanly on SIGTERM/SIGINT."""
    services = app.extensions['windair']

    def _handle(signum, frame):
        logger.info(f'{signal.Signals(signum).name} received, shutting down...')
        shutdown(services)
        sys.exit(0)

    signal.signal(signal.SIGTERM, _handle)
    signal.signal(signal.SIGINT, _handle)


def run_development_server():
    """Run the development server."""
    app = create_app()
    install_signal_handlers(app)
    port = config.port

    logger.info(f'Starting Wind Airways proxy on http://localhost:{port}')
    logger.info(f'Newsky API: {config.newsky.base_url}')
    logger.info(f'Airline: {config.airline_code.upper()}')
    logger.info(f'Cache TTL: {config.cache.ttl_seconds}s')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        use_reloader=False,  # Disable reloader to prevent duplicate sweeper threads
    )


if __name__ == '__main__':
    run_development_server()
