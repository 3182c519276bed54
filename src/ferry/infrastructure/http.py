"""HTTP client factories."""

import ssl
import typing as t

import aiohttp
import certifi


def create_ssl_context() -> ssl.SSLContext:
    """Create an SSL context that trusts certifi's CA bundle.

    Some platforms ship without a usable system trust store, so the bundle
    is loaded explicitly.
    """
    return ssl.create_default_context(cafile=certifi.where())


def create_secure_connector(
    ssl: ssl.SSLContext | None = None, **kwargs: t.Any
) -> aiohttp.TCPConnector:
    """Create a TCP connector verifying certificates against certifi.

    Must be called from within a running event loop.

    Args:
        ssl: SSL context to use. Defaults to ``create_ssl_context()``.
        **kwargs: Extra ``aiohttp.TCPConnector`` arguments (limit, ttl_dns_cache...)
    """
    return aiohttp.TCPConnector(ssl=ssl or create_ssl_context(), **kwargs)


def create_client_session(
    timeout: float | None = None, **connector_kwargs: t.Any
) -> aiohttp.ClientSession:
    """Create a ClientSession with a secure connector and a total timeout."""
    return aiohttp.ClientSession(
        connector=create_secure_connector(**connector_kwargs),
        timeout=aiohttp.ClientTimeout(total=timeout),
    )
