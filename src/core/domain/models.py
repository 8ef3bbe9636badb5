"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El descriptor de request es un valor inmutable: se construye, se entrega al
  transporte y se descarta.

Nota:
- Estos modelos describen *qué* se envía a Jira, no *cómo* se envía.
- Un filtro de Jira es un payload opaco (`dict`): no lo modelamos.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.share_scope import ShareScope

JSON_CONTENT_TYPE = "application/json"


class HttpMethod(str, Enum):
    """Métodos HTTP usados por los endpoints `/filter`."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestDescriptor(BaseModel):
    """Representación normalizada de una request saliente.

    Por qué existe:
    - Separa la construcción de la request (Core) del envío (adapters).
    - Permite testear cada operación sin red, inspeccionando el descriptor.
    """

    model_config = ConfigDict(frozen=True)

    endpoint_uri: str = Field(
        ...,
        min_length=1,
        description="URL absoluta producida por `JiraTransport.build_url`.",
    )
    http_method: HttpMethod = Field(
        ...,
        description="Método HTTP de la operación.",
    )
    body: Any = Field(
        default_factory=dict,
        description="Cuerpo JSON; `{}` cuando la operación no envía nada.",
    )
    query_parameters: dict[str, str] = Field(
        default_factory=dict,
        description="Query string. `fields`/`expand` van como listas separadas por comas.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Política de redirects: siempre se siguen.",
    )
    content_type: str = Field(
        default=JSON_CONTENT_TYPE,
        description="Content-Type de request y respuesta.",
    )


class FilterOptions(BaseModel):
    """Opciones de llamada de una operación del `FilterClient`.

    Todos los campos son opcionales a nivel de tipo: cada operación comprueba
    los que necesita y falla con `FilterRequestError` si faltan.
    """

    # Una clave mal escrita ("expnd", "filterId") debe fallar, no ignorarse.
    model_config = ConfigDict(extra="forbid")

    filter_id: int | str | None = Field(
        default=None,
        description="ID del filtro usado en el path (`/filter/{id}`).",
    )
    fields: Any = Field(
        default=None,
        description="Campos a incluir en la respuesta (lista de strings).",
    )
    expand: Any = Field(
        default=None,
        description="Entidades a expandir (lista de strings).",
    )
    columns: Any = Field(
        default=None,
        description="Nombres de columnas para `set_filter_columns`.",
    )
    filter: Any = Field(
        default=None,
        description="Definición del filtro (payload opaco) para create/update.",
    )
    scope: ShareScope | str | None = Field(
        default=None,
        description="Nuevo share scope por defecto (GLOBAL o PRIVATE).",
    )
