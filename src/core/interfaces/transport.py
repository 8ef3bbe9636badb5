"""Contrato del transporte hacia Jira.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el cliente httpx real y los dobles de test sean intercambiables
  sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import RequestDescriptor


@runtime_checkable
class JiraTransport(Protocol):
    """Contrato mínimo del colaborador que resuelve URLs y ejecuta requests.

    Reglas de diseño:
    - `build_url` es síncrono: solo concatena la base configurada.
    - `make_request` es asíncrono porque hace I/O (HTTP).
    - Si `success_message` viene informado y la request tiene éxito, se
      devuelve ese literal en lugar del cuerpo parseado.
    - Los errores se lanzan (nunca se devuelven como valor).
    """

    def build_url(self, path: str) -> str:
        """Resuelve un path relativo (`/filter/...`) contra la base de la API."""

        ...

    async def make_request(
        self,
        descriptor: RequestDescriptor,
        success_message: str | None = None,
    ) -> Any:
        """Ejecuta la request descrita y devuelve el resultado."""

        ...
