"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el transporte HTTP lea host/credenciales de forma consistente.

El `.env` de usuario vive en el directorio de aplicación que resuelve Click
(`typer.get_app_dir`) y se edita con python-dotenv, el mismo parser que usa
pydantic-settings al leerlo.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "jira-filters"
_USER_ENV_HEADER = "# jira-filters user config (.env)\n"


def get_user_config_dir() -> Path:
    """`~/.config/jira-filters`, `%APPDATA%\\jira-filters` o Application Support."""

    return Path(typer.get_app_dir(APP_NAME))


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Fija claves en el .env de usuario, conservando el resto.

    `None` deja la clave como estaba.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text(_USER_ENV_HEADER, encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="JIRA_FILTERS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://localhost",
        min_length=8,
        description="Esquema + host (+ puerto) de la instancia Jira.",
    )
    path_prefix: str = Field(
        default="",
        description="Context path de Jira (p.ej. '/jira'); vacío si está en la raíz.",
    )
    api_version: str = Field(
        default="2",
        min_length=1,
        description="Versión de la REST API (`/rest/api/<version>`).",
    )

    username: str | None = Field(
        default=None,
        description="Usuario para autenticación básica.",
    )
    api_token: str | None = Field(
        default=None,
        description="API token (o password) para autenticación básica.",
    )
    personal_access_token: str | None = Field(
        default=None,
        description="PAT para autenticación Bearer; tiene prioridad sobre la básica.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verificar certificados TLS.",
    )
    user_agent: str = Field(
        default="jira-filters/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("path_prefix")
    @classmethod
    def _normalize_path_prefix(cls, value: str) -> str:
        value = value.strip().strip("/")
        return f"/{value}" if value else ""

    @property
    def api_root(self) -> str:
        """URL absoluta de la REST API, sin barra final."""

        return f"{self.base_url}{self.path_prefix}/rest/api/{self.api_version}"
