"""Builders de clientes httpx.

Estandariza timeouts y headers comunes; los clientes de la API reciben el
`httpx.Client` ya construido, así los tests inyectan un `httpx.MockTransport`.
Sin `settings` se usan los defaults; el entorno solo se lee vía `from_settings`.
"""

from __future__ import annotations

import httpx

from arachnio.core.config import ArachnioSettings, default_settings


def _default_headers(
    settings: ArachnioSettings,
    extra_headers: dict[str, str] | None,
) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_client(
    settings: ArachnioSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    No sigue redirecciones: la API responde en la ruta pedida o falla.
    """

    settings = settings or default_settings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def build_async_client(
    settings: ArachnioSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Equivalente asíncrono de `build_client`."""

    settings = settings or default_settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )
