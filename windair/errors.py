"""
Error taxonomy for proxy failures.

Route handlers raise these and the application's error handlers turn
them into the JSON error envelope. Each error knows its HTTP status.
"""

from typing import Optional


class ProxyError(Exception):
    """Base class for errors rendered as a JSON error envelope."""

    status_code = 500
    error = 'Internal server error'

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(message or self.error)
        self.message = message or self.error
        self.detail = detail

    def to_dict(self) -> dict:
        body = {'success': False, 'error': self.message}
        if self.detail is not None:
            body['detail'] = self.detail
        return body


class ConfigError(ProxyError):
    """Server is missing configuration needed to serve the request."""

    error = 'Server configuration error'


class ValidationError(ProxyError):
    """Missing or malformed client input."""

    status_code = 400
    error = 'Invalid request'


class UpstreamError(ProxyError):
    """Upstream API answered with a non-2xx status."""

    error = 'Upstream error'

    def __init__(self, status_code: int, body: str = ''):
        super().__init__(self.error, detail=body)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f'Upstream returned {self.status_code}'


class TransportError(ProxyError):
    """Network failure or unparseable upstream response."""

    error = 'Upstream request failed'

    def __init__(self, description: str):
        super().__init__(self.error, detail=description)
        self.description = description

    def __str__(self) -> str:
        return self.description


class UpstreamTimeout(TransportError):
    """Upstream did not answer within the configured timeout."""

    error = 'Upstream timeout'
