"""
Pilot API endpoints.

Provides endpoints for:
- GET /api/pilots - Airline pilot roster
- GET /api/pilots/multiple?ids=a,b,c - Batched pilot lookup
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List
from urllib.parse import quote

from flask import Blueprint, request

from windair.api.flights import int_arg
from windair.cache import cached_response
from windair.errors import ProxyError, ValidationError
from windair.services import current_services
from windair.services.newsky import NewskyGateway
from windair.services.normalize import normalize_pilot, result_count

logger = logging.getLogger(__name__)

pilots_bp = Blueprint('pilots', __name__, url_prefix='/api/pilots')


def parse_ids(raw: str) -> List[str]:
    """Split a comma-separated id list, dropping blanks."""
    return [part.strip() for part in (raw or '').split(',') if part.strip()]


def lookup_pilot(gateway: NewskyGateway, pilot_id: str) -> dict:
    """
    Fetch and normalize one pilot.

    Failures become an {id, error} placeholder so one bad id never
    aborts the batch.
    """
    try:
        data = gateway.fetch(f'/pilot/{quote(pilot_id, safe="")}')
    except ProxyError as e:
        logger.warning(f'Pilot lookup failed for {pilot_id}: {e}')
        return {'id': pilot_id, 'error': str(e)}
    return normalize_pilot(pilot_id, data)


@pilots_bp.route('', methods=['GET'])
@cached_response(ttl=300)
def list_pilots():
    """
    List airline pilots.

    Query parameters:
    - limit: int, max pilots to return (default 20)
    """
    data = current_services().gateway.fetch('/pilots', params={'limit': int_arg('limit', 20, minimum=1)})
    return {
        'success': True,
        'data': data,
        'count': result_count(data),
        'cached': False,
    }


@pilots_bp.route('/multiple', methods=['GET'])
def get_multiple_pilots():
    """
    Look up several pilots at once.

    One upstream call per id, run concurrently on a bounded pool. Results
    come back in the order the ids were given; a failed id yields an
    error entry in its slot.
    """
    ids = parse_ids(request.args.get('ids', ''))
    if not ids:
        raise ValidationError("Query parameter 'ids' is required (comma-separated)")

    services = current_services()
    gateway = services.gateway
    workers = min(len(ids), services.config.pilot_lookup_concurrency)

    logger.debug(f'Looking up {len(ids)} pilots with {workers} workers')

    # Workers don't need the app context; the gateway is passed in directly
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='pilot-lookup') as pool:
        pilots = list(pool.map(lambda pilot_id: lookup_pilot(gateway, pilot_id), ids))

    return {'pilots': pilots}
