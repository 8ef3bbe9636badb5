"""Excepciones del cliente de filtros.

Se mantienen en un módulo propio para que Core y adapters las compartan sin
importaciones circulares.
"""

from __future__ import annotations

from typing import Any


class FilterClientError(Exception):
    """Error genérico del cliente de filtros."""


class FilterRequestError(FilterClientError, ValueError):
    """Opciones inválidas: falta un campo obligatorio o una lista está mal formada.

    Se lanza antes de construir el descriptor, sin hacer I/O.
    """


class JiraTransportError(FilterClientError):
    """Fallo de red/transporte al hablar con Jira."""


class JiraRequestError(JiraTransportError):
    """Jira respondió con un status no 2xx."""

    def __init__(
        self,
        status_code: int,
        *,
        error_messages: list[str] | None = None,
        errors: dict[str, Any] | None = None,
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_messages = list(error_messages or [])
        self.errors = dict(errors or {})
        self.body = body
        super().__init__(self._describe())

    def _describe(self) -> str:
        details = list(self.error_messages)
        details.extend(f"{key}: {value}" for key, value in self.errors.items())
        if not details:
            return f"Jira returned HTTP {self.status_code}"
        return f"Jira returned HTTP {self.status_code}: " + "; ".join(details)
