"""
Airline API endpoints.

Provides endpoints for:
- GET /api/newsky/airline - Normalized airline profile
- GET /api/statistics - Airline statistics
- GET /api/fleet - Airline fleet
"""

import logging

from flask import Blueprint

from windair.cache import cached_response
from windair.services import current_services
from windair.services.normalize import normalize_airline, result_count

logger = logging.getLogger(__name__)

airline_bp = Blueprint('airline', __name__, url_prefix='/api')


@airline_bp.route('/newsky/airline', methods=['GET'])
@cached_response(ttl=60)
def get_airline():
    """
    Get the airline profile.

    Reshapes the upstream object into a stable summary of identity,
    totals and branding. See services.normalize for field precedence.
    """
    data = current_services().gateway.fetch('/airline')
    return normalize_airline(data)


@airline_bp.route('/statistics', methods=['GET'])
@cached_response(ttl=600)
def get_statistics():
    """Get aggregate airline statistics."""
    data = current_services().gateway.fetch('/statistics')
    return {'success': True, 'data': data, 'cached': False}


@airline_bp.route('/fleet', methods=['GET'])
@cached_response(ttl=600)
def get_fleet():
    data = current_services().gateway.fetch('/fleet')
    return {
        'success': True,
        'data': data,
        'count': result_count(data),
        'cached': False,
    }
