"""HTTP client factory for calling a running factor service."""

import httpx

from factor_service.settings import Settings


def create_factor_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build an AsyncClient configured for the factor service.

    No base_url is set: httpx would append a trailing slash to the service
    path, so callers address the full service URL instead.
    """
    return httpx.AsyncClient(timeout=settings.api_timeout)
