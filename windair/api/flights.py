"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights-ongoing - Flights currently in progress
- GET /api/flights - Paged airline flight list
- GET /api/flight/<id> - Single flight details
- POST /api/newsky/flights/bydate - Flights within a date range
"""

import logging
from urllib.parse import quote

from flask import Blueprint, request

from windair.cache import cached_response
from windair.errors import ValidationError
from windair.services import current_services
from windair.services.normalize import result_count

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api')

DEFAULT_PAGE_SIZE = 50
DEFAULT_BYDATE_COUNT = 50


def int_arg(name: str, default: int, minimum: int = 0) -> int:
    """Read a non-negative integer query parameter."""
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer")
    if value < minimum:
        raise ValidationError(f"'{name}' must be >= {minimum}")
    return value


def body_int(payload: dict, name: str, default: int) -> int:
    """Read a non-negative integer from a JSON body; explicit 0 is kept."""
    value = payload.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(f"'{name}' must be an integer")
    try:
        value = int(value)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer")
    if value < 0:
        raise ValidationError(f"'{name}' must be >= 0")
    return value


@flights_bp.route('/flights-ongoing', methods=['GET'])
@cached_response(ttl=60)
def flights_ongoing():
    """
    Get flights currently in progress.

    The upstream {totalResults, results} payload is returned unchanged.
    """
    return current_services().gateway.fetch('/flights/ongoing')


@flights_bp.route('/flights', methods=['GET'])
@cached_response(ttl=300)
def list_flights():
    """
    List the airline's flights.

    Query parameters:
    - limit: int, page size (default 50)
    - offset: int, items to skip (default 0)
    """
    params = {
        'limit': int_arg('limit', DEFAULT_PAGE_SIZE, minimum=1),
        'offset': int_arg('offset', 0),
    }
    data = current_services().gateway.fetch('/flights', params=params)

    return {
        'success': True,
        'data': data,
        'count': result_count(data),
        'cached': False,
    }


@flights_bp.route('/flight/<flight_id>', methods=['GET'])
@cached_response(ttl=300)
def get_flight(flight_id: str):
    """Get a single flight by its upstream id."""
    data = current_services().gateway.fetch(f'/flight/{quote(flight_id, safe="")}')
    return {'success': True, 'data': data, 'cached': False}


@flights_bp.route('/newsky/flights/bydate', methods=['POST'])
def flights_by_date():
    """
    Query flights within a date range.

    JSON body:
    - start, end: required date/time strings
    - skip: int, default 0
    - count: int, default 50
    - includeDeleted: bool, default false

    Validation happens before any upstream call.
    """
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')

    start = payload.get('start')
    end = payload.get('end')
    if not start or not end:
        raise ValidationError("'start' and 'end' are required")

    skip = body_int(payload, 'skip', 0)
    count = body_int(payload, 'count', DEFAULT_BYDATE_COUNT)

    include_deleted = payload.get('includeDeleted')
    if include_deleted is None:
        include_deleted = False
    elif not isinstance(include_deleted, bool):
        raise ValidationError("'includeDeleted' must be a boolean")

    body = {
        'start': start,
        'end': end,
        'skip': skip,
        'count': count,
        'includeDeleted': include_deleted,
    }

    logger.info(f'Flights by date {start} -> {end} (skip={skip}, count={count})')
    return current_services().gateway.fetch('/flights/bydate', method='POST', body=body)
