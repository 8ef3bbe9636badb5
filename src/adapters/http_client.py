"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, autenticación y redirects para Jira.
- Facilita testeo: se puede pasar un `httpx.MockTransport` en lugar de red.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.domain.models import JSON_CONTENT_TYPE


def build_auth(settings: AppSettings) -> httpx.Auth | None:
    """Elige la autenticación según la config.

    Un PAT (Bearer) tiene prioridad sobre usuario + token (Basic).
    """

    if settings.personal_access_token:
        return _BearerAuth(settings.personal_access_token)
    if settings.username and settings.api_token:
        return httpx.BasicAuth(settings.username, settings.api_token)
    return None


class _BearerAuth(httpx.Auth):
    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults para la REST API de Jira.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `transport` permite inyectar un `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_CONTENT_TYPE,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        auth=build_auth(settings),
        verify=settings.verify_ssl,
        transport=transport,
    )
