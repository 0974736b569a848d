"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para ambas llamadas (webhook y envío).
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_timeout(settings: AppSettings) -> httpx.Timeout:
    """Mismo límite para todas las llamadas; connect se configura aparte."""

    return httpx.Timeout(
        settings.http_timeout_seconds,
        connect=settings.http_connect_timeout_seconds,
    )


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Cada llamada abre y cierra su propio cliente (`with build_client(...)`),
      no hay pool compartido entre los dos endpoints.
    - `transport` permite sustituir la red por un stub en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=build_timeout(settings),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def short_body(response: httpx.Response, limit: int = 200) -> str:
    """Cuerpo de la respuesta recortado para logs/reportes."""

    text = response.text.strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text
