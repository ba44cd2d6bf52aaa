"""
Services module - upstream API client, payload normalization and the
per-app service container used by route handlers.
"""

from dataclasses import dataclass

from flask import current_app
from flask_limiter import Limiter

from windair.cache import ResponseCache
from windair.config import AppConfig
from windair.services.newsky import NewskyGateway


@dataclass
class Services:
    """Objects shared by the route handlers of one application."""
    config: AppConfig
    cache: ResponseCache
    gateway: NewskyGateway
    limiter: Limiter


def current_services() -> Services:
    """Services attached to the active Flask application."""
    return current_app.extensions['windair']


__all__ = ['NewskyGateway', 'Services', 'current_services']
