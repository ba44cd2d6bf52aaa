"""
Newsky airline API client.

Handles communication with the Newsky REST API, including:
- Bearer token authentication (token never leaves the server)
- Per-call timeouts
- Mapping of upstream failures onto the proxy error taxonomy

Every call is attempted exactly once; there are no retries.
"""

import logging
import threading
from typing import Any, Optional
from urllib.parse import urlencode

import requests

from windair.config import NewskyConfig, config
from windair.errors import ConfigError, TransportError, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)

USER_AGENT = 'WindAirways/1.0'


class NewskyGateway:
    """
    Client for the Newsky airline API.

    Handles:
    - GET and POST requests relative to the configured base URL
    - Authorization header injection
    - Timeout and error translation
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = 'https://beta.newsky.app/api/airline-api',
        timeout: float = 10.0,
        map_url: str = 'https://newsky.app/map/embed',
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.map_base_url = map_url
        # An injected session is shared by all threads; otherwise each
        # thread lazily opens its own requests.Session
        self._shared_session = session
        self._local = threading.local()

        if not token:
            logger.warning('Newsky API token not configured - upstream calls will fail')

    @classmethod
    def from_config(cls, newsky: Optional[NewskyConfig] = None) -> 'NewskyGateway':
        """Create gateway from application configuration."""
        newsky = newsky or config.newsky
        return cls(
            token=newsky.token,
            base_url=newsky.base_url,
            timeout=newsky.timeout_seconds,
            map_url=newsky.map_url,
        )

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread (or the injected shared one)."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def _require_token(self) -> str:
        if not self.token:
            raise ConfigError('NEWSKY_API_TOKEN is not configured on the server')
        return self.token

    def fetch(
        self,
        path: str,
        method: str = 'GET',
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """
        Call an upstream endpoint and return its decoded JSON.

        Args:
            path: Path relative to the base URL, e.g. '/flights/ongoing'
            method: HTTP method
            body: JSON body for POST requests
            params: Optional query parameters

        Raises:
            ConfigError if no token is configured
            UpstreamTimeout if no response arrives within the timeout
            UpstreamError on a non-2xx response
            TransportError on network or decode failures
        """
        token = self._require_token()
        url = f'{self.base_url}/{path.lstrip("/")}'
        headers = {
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json',
            'User-Agent': USER_AGENT,
        }

        logger.debug(f'Upstream {method} {url} params={params}')

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error(f'Upstream timeout after {self.timeout}s: {method} {url}')
            raise UpstreamTimeout(f'No response from upstream within {self.timeout:g}s')
        except requests.exceptions.RequestException as e:
            logger.error(f'Upstream request failed: {method} {url}: {e}')
            raise TransportError(str(e))

        if not 200 <= response.status_code < 300:
            logger.warning(f'Upstream {method} {url} returned {response.status_code}')
            raise UpstreamError(response.status_code, _read_text(response))

        try:
            return response.json()
        except ValueError as e:
            logger.error(f'Upstream {method} {url} returned invalid JSON: {e}')
            raise TransportError(f'Invalid JSON from upstream: {e}')

    def map_url(self) -> str:
        """
        Build the embeddable live-map URL.

        The map service authenticates via a token query parameter, so the
        returned link carries the token.
        """
        token = self._require_token()
        separator = '&' if '?' in self.map_base_url else '?'
        return f'{self.map_base_url}{separator}{urlencode({"token": token})}'


def _read_text(response: requests.Response) -> str:
    """Best-effort read of an error body."""
    try:
        return response.text or ''
    except Exception:
        return ''
