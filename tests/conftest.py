"""Shared fixtures: a fake upstream gateway and a configured test app."""

import threading

import pytest

from windair.app import create_app
from windair.cache import ResponseCache
from windair.config import AppConfig, NewskyConfig, RateLimitConfig


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway:
    """
    Stand-in for NewskyGateway.

    Responses are registered per path; a registered exception is raised
    instead of returned. Every call is recorded.
    """

    def __init__(self, token='test-token'):
        self.token = token
        self.responses = {}
        self.calls = []
        self._lock = threading.Lock()

    def respond(self, path, result):
        self.responses[path] = result

    def fetch(self, path, method='GET', body=None, params=None):
        with self._lock:
            self.calls.append({'path': path, 'method': method, 'body': body, 'params': params})
        result = self.responses.get(path)
        if isinstance(result, Exception):
            raise result
        return result

    def map_url(self):
        return f'https://newsky.app/map/embed?token={self.token}'

    def paths(self):
        return [call['path'] for call in self.calls]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app_config():
    return AppConfig(
        newsky=NewskyConfig(token='test-token', base_url='https://upstream.test/api'),
        rate_limit=RateLimitConfig(max_requests=0),
        allowed_origins=('http://localhost:3000',),
    )


@pytest.fixture
def cache(clock):
    return ResponseCache(default_ttl=300, clock=clock)


@pytest.fixture
def app(app_config, gateway, cache):
    app = create_app(app_config, gateway=gateway, cache=cache, start_background=False)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
