"""
Configuration management for the Wind Airways proxy.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

# Used when ALLOWED_ORIGINS is empty
DEFAULT_ALLOWED_ORIGINS = (
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'http://localhost:5500',
    'http://127.0.0.1:5500',
    'http://localhost:8080',
    'http://127.0.0.1:8080',
)


def _parse_origins(value: str) -> Tuple[str, ...]:
    """Parse comma-separated origins, falling back to localhost defaults."""
    origins = tuple(
        origin.strip().rstrip('/')
        for origin in (value or '').split(',')
        if origin.strip()
    )
    return origins or DEFAULT_ALLOWED_ORIGINS


def _parse_int(value: Optional[str], default: int) -> int:
    """Parse an integer setting, or the default if empty/invalid."""
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class NewskyConfig:
    """Newsky airline API configuration."""
    token: Optional[str] = None
    base_url: str = 'https://beta.newsky.app/api/airline-api'
    map_url: str = 'https://newsky.app/map/embed'
    timeout_ms: int = 10000

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


@dataclass(frozen=True)
class CacheConfig:
    """In-memory response cache settings."""
    ttl_seconds: int = 300
    check_period_seconds: int = 120


@dataclass(frozen=True)
class RateLimitConfig:
    """Per-client request limits for /api/ routes."""
    window_ms: int = 900000
    max_requests: int = 100

    @property
    def enabled(self) -> bool:
        return self.max_requests > 0

    @property
    def window_seconds(self) -> float:
        return self.window_ms / 1000.0

    @property
    def limit_string(self) -> str:
        """Limit in flask-limiter notation, e.g. '100 per 900 seconds'."""
        seconds = max(1, round(self.window_seconds))
        return f'{self.max_requests} per {seconds} seconds'


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    newsky: NewskyConfig = field(default_factory=NewskyConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)

    allowed_origins: Tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    airline_code: str = 'win'
    port: int = 3000
    pilot_lookup_concurrency: int = 8

    # Flask settings
    environment: str = 'production'
    debug: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment == 'development'


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        newsky=NewskyConfig(
            token=os.getenv('NEWSKY_API_TOKEN') or os.getenv('NEWSKY_TOKEN') or None,
            base_url=os.getenv(
                'NEWSKY_API_BASE_URL', 'https://beta.newsky.app/api/airline-api'
            ).rstrip('/'),
            map_url=os.getenv('NEWSKY_MAP_URL', 'https://newsky.app/map/embed'),
            timeout_ms=_parse_int(os.getenv('API_TIMEOUT'), 10000),
        ),
        cache=CacheConfig(
            ttl_seconds=_parse_int(os.getenv('CACHE_TTL'), 300),
            check_period_seconds=_parse_int(os.getenv('CACHE_CHECK_PERIOD'), 120),
        ),
        rate_limit=RateLimitConfig(
            window_ms=_parse_int(os.getenv('RATE_LIMIT_WINDOW_MS'), 900000),
            max_requests=_parse_int(os.getenv('RATE_LIMIT_MAX_REQUESTS'), 100),
        ),
        allowed_origins=_parse_origins(os.getenv('ALLOWED_ORIGINS', '')),
        airline_code=os.getenv('AIRLINE_CODE') or 'win',
        port=_parse_int(os.getenv('PORT'), 3000),
        pilot_lookup_concurrency=max(1, _parse_int(os.getenv('PILOT_LOOKUP_CONCURRENCY'), 8)),
        environment=os.getenv('APP_ENV', 'production'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
