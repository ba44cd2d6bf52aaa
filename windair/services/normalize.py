"""
Normalization of Newsky payloads into stable response shapes.

Upstream objects are loosely shaped: the same value can appear under
several field names depending on endpoint and API version. Each output
field below lists its candidate paths in precedence order; the first
path holding a non-None value wins.
"""

from typing import Any, Iterable, Optional

AIRLINE_SOURCE_URL = 'https://beta.newsky.app/api/airline-api/airline'

# output field -> candidate dotted paths, highest precedence first
AIRLINE_FIELDS = {
    'id': ('_id', 'id'),
    'icao': ('icao',),
    'name': ('fullname', 'shortname', 'name'),
    'countryCode': ('countryCode',),
    'homeIcao': ('homeIcao',),
    'tier': ('tier',),
    'active': ('status.active',),
}

AIRLINE_TOTALS = {
    'flights': ('stats.flights', 'statsTotal.flights'),
    'pilotsActive': ('stats.activePilots', 'statsTotal.activePilots'),
    'pilotsRecentActive': ('stats.recentActivePilots',),
    'flightsRecent': ('stats.recentFlights',),
    'rating': ('stats.rating', 'statsTotal.rating'),
    'hours': ('stats.hours', 'statsTotal.hours'),
    'routes': ('stats.routes', 'statsTotal.routes'),
}

# Totals reported as 0 rather than null when absent
AIRLINE_COUNTERS = ('flights', 'pilotsActive', 'pilotsRecentActive', 'flightsRecent')

PILOT_FIELDS = {
    'name': ('fullname', 'name', 'username'),
    'callsign': ('callsign', 'airlineCallsign'),
    'flights': ('stats.flights', 'statsTotal.flights', 'flights'),
    'rating': ('stats.rating', 'statsTotal.rating', 'rating'),
    'lastFlight': ('lastFlight', 'stats.lastFlight', 'lastFlightDate'),
}

# Pilot hours: paths already in hours, then paths in minutes
PILOT_HOURS_FIELDS = ('stats.hours', 'statsTotal.hours', 'hours')
PILOT_MINUTES_FIELDS = ('stats.time', 'statsTotal.time', 'flightTime')


def dig(data: Any, path: str) -> Any:
    """Follow a dotted path through nested dicts; None if any hop is missing."""
    current = data
    for part in path.split('.'):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def first_present(data: Any, paths: Iterable[str]) -> Any:
    """Value of the first path that is not None."""
    for path in paths:
        value = dig(data, path)
        if value is not None:
            return value
    return None


def _unwrap(data: Any, key: str) -> dict:
    """Upstream sometimes nests the object under its resource name."""
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    return data if isinstance(data, dict) else {}


def normalize_airline(data: Any) -> dict:
    """Reshape the upstream /airline response into the airline summary."""
    airline = _unwrap(data, 'airline')

    summary = {field: first_present(airline, paths) for field, paths in AIRLINE_FIELDS.items()}
    summary['name'] = summary['name'] or 'Unknown'

    totals = {field: first_present(airline, paths) for field, paths in AIRLINE_TOTALS.items()}
    for counter in AIRLINE_COUNTERS:
        if totals[counter] is None:
            totals[counter] = 0

    return {
        'airline': summary,
        'totals': totals,
        'description': dig(airline, 'documents.summary') or '',
        'logo': airline.get('logo'),
        'banner': airline.get('banner'),
        'source': AIRLINE_SOURCE_URL,
    }


def _pilot_hours(pilot: dict) -> Optional[float]:
    hours = first_present(pilot, PILOT_HOURS_FIELDS)
    if hours is not None:
        return hours
    minutes = first_present(pilot, PILOT_MINUTES_FIELDS)
    if isinstance(minutes, (int, float)):
        return round(minutes / 60.0, 1)
    return None


def normalize_pilot(pilot_id: str, data: Any) -> dict:
    """Reshape an upstream pilot object into the pilot summary."""
    pilot = _unwrap(data, 'pilot')

    name = first_present(pilot, PILOT_FIELDS['name'])
    if name is None:
        parts = [pilot.get('firstName'), pilot.get('lastName')]
        name = ' '.join(p for p in parts if p) or None

    return {
        'id': pilot_id,
        'name': name,
        'callsign': first_present(pilot, PILOT_FIELDS['callsign']),
        'hours': _pilot_hours(pilot),
        'flights': first_present(pilot, PILOT_FIELDS['flights']) or 0,
        'rating': first_present(pilot, PILOT_FIELDS['rating']),
        'lastFlight': first_present(pilot, PILOT_FIELDS['lastFlight']),
    }


def result_count(data: Any) -> int:
    """Number of items in a list payload or in an object's results list."""
    if isinstance(data, list):
        return len(data)
    if isinstance(data, dict) and isinstance(data.get('results'), list):
        return len(data['results'])
    return 0
