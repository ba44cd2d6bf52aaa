"""
System API endpoints.

Provides endpoints for:
- GET /api/health - Liveness and cache status
- GET /api/map-url - Embeddable live-map link
- POST /api/cache/clear - Flush one cache key or all of them
- GET /api/cache/stats - Cache introspection
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, request

from windair.services import current_services

logger = logging.getLogger(__name__)

system_bp = Blueprint('system', __name__, url_prefix='/api')


@system_bp.route('/health', methods=['GET'])
def health():
    """Liveness check."""
    services = current_services()
    return {
        'status': 'online',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'airline': services.config.airline_code,
        'cache_stats': services.cache.stats,
    }


@system_bp.route('/map-url', methods=['GET'])
def map_url():
    """
    Get the live-map embed URL.

    No upstream call is made. The map service authenticates through the
    URL itself, so the link includes the token.
    """
    return {'url': current_services().gateway.map_url()}


@system_bp.route('/cache/clear', methods=['POST'])
def clear_cache():
    """
    Clear the response cache.

    JSON body:
    - key: optional cache key (request path + query); omit to clear all
    """
    payload = request.get_json(silent=True)
    key = payload.get('key') if isinstance(payload, dict) else None
    cache = current_services().cache

    if key:
        cache.clear(key)
        logger.info(f'Cache cleared for {key}')
        return {'success': True, 'message': f'Cache cleared for: {key}'}

    removed = cache.clear()
    logger.info(f'Cache flushed ({removed} entries)')
    return {'success': True, 'message': 'All cache entries cleared'}


@system_bp.route('/cache/stats', methods=['GET'])
def cache_stats():
    """Get cache statistics and live keys."""
    cache = current_services().cache
    return {
        'success': True,
        'stats': cache.stats,
        'keys': cache.keys(),
    }
