"""Transporte httpx hacia la REST API de Jira.

Implementa `core.interfaces.transport.JiraTransport`:
- `build_url` resuelve paths relativos contra `AppSettings.api_root`.
- `make_request` ejecuta un `RequestDescriptor` y traduce errores HTTP/red a
  las excepciones de `core.errors`.

Sin reintentos ni caché: cada descriptor es exactamente una request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import HttpMethod, RequestDescriptor
from core.errors import JiraRequestError, JiraTransportError

LOGGER = logging.getLogger(__name__)

_BODYLESS_METHODS = {HttpMethod.GET, HttpMethod.DELETE}


class JiraClient:
    """Colaborador HTTP compartido por los clientes de endpoints (`FilterClient`)."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        # Solo se cierra el cliente httpx propio; uno inyectado es del caller.
        self._owns_http = http_client is None
        self._http = build_async_client(self._settings) if http_client is None else http_client

    @property
    def settings(self) -> AppSettings:
        return self._settings

    async def __aenter__(self) -> "JiraClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def build_url(self, path: str) -> str:
        if path and not path.startswith("/"):
            path = "/" + path
        return f"{self._settings.api_root}{path}"

    async def make_request(
        self,
        descriptor: RequestDescriptor,
        success_message: str | None = None,
    ) -> Any:
        method = descriptor.http_method
        send_body = not (method in _BODYLESS_METHODS and descriptor.body in ({}, None))

        request_kwargs: dict[str, Any] = {
            "params": descriptor.query_parameters or None,
            "headers": {"Content-Type": descriptor.content_type},
            "follow_redirects": descriptor.follow_redirects,
        }
        if send_body:
            request_kwargs["json"] = descriptor.body

        LOGGER.debug("-> %s %s", method.value, descriptor.endpoint_uri)
        try:
            response = await self._http.request(
                method.value,
                descriptor.endpoint_uri,
                **request_kwargs,
            )
        except httpx.HTTPError as exc:
            LOGGER.warning("%s %s failed: %s", method.value, descriptor.endpoint_uri, exc)
            raise JiraTransportError(
                f"{method.value} {descriptor.endpoint_uri} failed: {exc}"
            ) from exc

        LOGGER.debug("<- %s %s", response.status_code, descriptor.endpoint_uri)

        if not response.is_success:
            error = _request_error(response)
            LOGGER.warning("%s %s: %s", method.value, descriptor.endpoint_uri, error)
            raise error

        if success_message is not None:
            return success_message
        return _parse_body(response)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        # Jira a veces responde texto plano en 2xx (p.ej. proxies intermedios).
        return response.text


def _request_error(response: httpx.Response) -> JiraRequestError:
    """Construye el error a partir del payload estándar de Jira.

    Jira devuelve `{"errorMessages": [...], "errors": {campo: mensaje}}`.
    """

    body = _parse_body(response)
    error_messages: list[str] = []
    errors: dict[str, Any] = {}
    if isinstance(body, dict):
        raw_messages = body.get("errorMessages")
        if isinstance(raw_messages, list):
            error_messages = [str(m) for m in raw_messages if m]
        raw_errors = body.get("errors")
        if isinstance(raw_errors, dict):
            errors = raw_errors
    elif isinstance(body, str) and body.strip():
        error_messages = [body.strip()]

    return JiraRequestError(
        response.status_code,
        error_messages=error_messages,
        errors=errors,
        body=body,
    )
