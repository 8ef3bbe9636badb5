"""Cliente de los endpoints REST `/filter` de Jira.

Cada método público se corresponde con una acción REST: construye un
`RequestDescriptor` a partir de las opciones de llamada y lo delega al
transporte inyectado. El cliente no hace I/O ni guarda estado propio, así que
puede usarse desde tareas concurrentes sin coordinación.

Las opciones se validan antes de construir nada: un `filter_id` ausente o una
lista mal formada fallan con `FilterRequestError` en lugar de producir un path
o un query string corrupto.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from core.domain.models import FilterOptions, HttpMethod, RequestDescriptor
from core.domain.share_scope import ShareScope
from core.errors import FilterRequestError
from core.interfaces.transport import JiraTransport

LOGGER = logging.getLogger(__name__)

FILTER_PATH = "/filter"
DEFAULT_SHARE_SCOPE_PATH = f"{FILTER_PATH}/defaultShareScope"

COLUMNS_UPDATED = "Columns Updated"
COLUMNS_RESET = "Columns Reset"


def join_list_parameter(name: str, values: Any) -> str:
    """Serializa una lista como un único valor separado por comas.

    Nunca deja coma inicial/final ni segmentos vacíos. Un string suelto se
    rechaza: iterarlo produciría un carácter por segmento.
    """

    items = _require_string_list(name, values)
    if not items:
        raise FilterRequestError(f"'{name}' must contain at least one value")
    return ",".join(items)


def _require_string_list(name: str, values: Any) -> list[str]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise FilterRequestError(
            f"'{name}' must be a list of strings, got {type(values).__name__}"
        )
    items = list(values)
    for item in items:
        if not isinstance(item, str) or not item:
            raise FilterRequestError(f"'{name}' items must be non-empty strings, got {item!r}")
    return items


def _coerce_options(options: FilterOptions | Mapping[str, Any] | None) -> FilterOptions:
    if options is None:
        return FilterOptions()
    if isinstance(options, FilterOptions):
        return options
    try:
        return FilterOptions(**options)
    except ValidationError as exc:
        raise FilterRequestError(f"invalid options: {exc}") from exc


def _require_filter_id(options: FilterOptions) -> str:
    filter_id = options.filter_id
    if filter_id is None or (isinstance(filter_id, str) and not filter_id.strip()):
        raise FilterRequestError("'filter_id' is required")
    return str(filter_id).strip()


def _require_filter_body(options: FilterOptions) -> Mapping[str, Any]:
    if options.filter is None:
        raise FilterRequestError("'filter' is required")
    if not isinstance(options.filter, Mapping):
        raise FilterRequestError(
            f"'filter' must be a JSON object, got {type(options.filter).__name__}"
        )
    return options.filter


def _require_scope(options: FilterOptions) -> ShareScope:
    if options.scope is None:
        raise FilterRequestError("'scope' is required")
    try:
        return ShareScope.parse(options.scope)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in ShareScope)
        raise FilterRequestError(
            f"'scope' must be one of {allowed}, got {options.scope!r}"
        ) from exc


class FilterClient:
    """Acceso a `/rest/api/<version>/filter`.

    Reglas de diseño:
    - Un método por acción REST, una sola llamada al transporte por método.
    - El resultado (o la excepción) del transporte llega tal cual al caller.
    """

    def __init__(self, transport: JiraTransport) -> None:
        self._transport = transport

    async def create_filter(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Crea un filtro y devuelve el filtro creado.

        Los permisos iniciales son los de share scope por defecto del usuario.
        """

        opts = _coerce_options(options)
        body = _require_filter_body(opts)
        query: dict[str, str] = {}
        if opts.expand is not None:
            query["expand"] = join_list_parameter("expand", opts.expand)

        descriptor = self._descriptor(FILTER_PATH, HttpMethod.POST, body=body, query=query)
        return await self._send(descriptor)

    async def get_filter(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Devuelve el filtro con `filter_id`."""

        descriptor = self.build_request_options(options, "", HttpMethod.GET)
        return await self._send(descriptor)

    async def update_filter(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Actualiza un filtro existente y devuelve su nuevo valor."""

        opts = _coerce_options(options)
        body = _require_filter_body(opts)
        descriptor = self.build_request_options(opts, "", HttpMethod.PUT, body)
        return await self._send(descriptor)

    async def get_filter_columns(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Devuelve las columnas por defecto del filtro (para el usuario actual)."""

        descriptor = self.build_request_options(options, "/columns", HttpMethod.GET)
        return await self._send(descriptor)

    async def set_filter_columns(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Fija las columnas del filtro. Devuelve `"Columns Updated"`."""

        opts = _coerce_options(options)
        if opts.columns is None:
            raise FilterRequestError("'columns' is required")
        body = {"columns": _require_string_list("columns", opts.columns)}
        descriptor = self.build_request_options(opts, "/columns", HttpMethod.PUT, body)
        return await self._send(descriptor, COLUMNS_UPDATED)

    async def reset_filter_columns(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Quita la configuración de columnas propia del filtro. Devuelve `"Columns Reset"`."""

        descriptor = self.build_request_options(options, "/columns", HttpMethod.DELETE)
        return await self._send(descriptor, COLUMNS_RESET)

    async def get_default_share_scope(
        self, options: FilterOptions | Mapping[str, Any] | None = None
    ) -> Any:
        """Devuelve `{"scope": ...}` del usuario autenticado. `options` se ignora."""

        descriptor = self._descriptor(DEFAULT_SHARE_SCOPE_PATH, HttpMethod.GET)
        return await self._send(descriptor)

    async def set_default_share_scope(self, options: FilterOptions | Mapping[str, Any]) -> Any:
        """Fija el share scope por defecto (GLOBAL o PRIVATE)."""

        scope = _require_scope(_coerce_options(options))
        descriptor = self._descriptor(
            DEFAULT_SHARE_SCOPE_PATH,
            HttpMethod.PUT,
            body={"scope": scope.value},
        )
        return await self._send(descriptor)

    def build_request_options(
        self,
        options: FilterOptions | Mapping[str, Any],
        path: str,
        method: HttpMethod,
        body: Any = None,
        query_parameters: Mapping[str, str] | None = None,
    ) -> RequestDescriptor:
        """Construye el descriptor de una operación sobre `/filter/{filter_id}{path}`.

        `fields` y `expand` de las opciones se añaden al query string cuando
        están presentes; si no, la clave no aparece.
        """

        opts = _coerce_options(options)
        base_path = f"{FILTER_PATH}/{_require_filter_id(opts)}"
        query = dict(query_parameters or {})

        if opts.fields is not None:
            query["fields"] = join_list_parameter("fields", opts.fields)
        if opts.expand is not None:
            query["expand"] = join_list_parameter("expand", opts.expand)

        return self._descriptor(base_path + path, method, body=body, query=query)

    def _descriptor(
        self,
        path: str,
        method: HttpMethod,
        *,
        body: Any = None,
        query: Mapping[str, str] | None = None,
    ) -> RequestDescriptor:
        return RequestDescriptor(
            endpoint_uri=self._transport.build_url(path),
            http_method=method,
            body={} if body is None else body,
            query_parameters=dict(query or {}),
        )

    async def _send(self, descriptor: RequestDescriptor, success_message: str | None = None) -> Any:
        LOGGER.debug(
            "%s %s params=%s",
            descriptor.http_method.value,
            descriptor.endpoint_uri,
            descriptor.query_parameters,
        )
        return await self._transport.make_request(descriptor, success_message)
