"""
Wind Airways Backend Package.

API proxy for the Wind Airways virtual airline site, built with Flask and
requests. Forwards browser requests to the Newsky airline API while
keeping the API token on the server.

Modules:
    api/         REST endpoints for flights, pilots, airline data and cache admin
    services/    Newsky API gateway and payload normalization
    cache.py     Thread-safe TTL cache for upstream responses
    errors.py    Error taxonomy rendered as JSON error envelopes
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
