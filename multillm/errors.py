"""
Error taxonomy for the proxy.

Each error carries the HTTP status the API layer should answer with, so
route handlers never have to translate exceptions one by one.
"""

from typing import Optional


class ProxyError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProxyError):
    """Bad or missing input, detected before any network call."""

    status_code = 400


class UnavailableProviderError(ProxyError):
    status_code = 400

    def __init__(self, provider: str):
        super().__init__(f"Provider {provider} is not available")
        self.provider = provider


class UnknownModelError(ProxyError):
    status_code = 400

    def __init__(self, provider: str, model: str):
        super().__init__(f"Model {model} not available for {provider}")
        self.provider = provider
        self.model = model


class ProviderCallError(ProxyError):
    """Upstream failure: network error, non-2xx status, unreadable body or SDK exception."""

    status_code = 500

    def __init__(self, message: str, provider: str = "", upstream_status: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.upstream_status = upstream_status
