"""Exportación JSON de respuestas de Jira.

Por qué JSON:
- Un filtro exportado puede reutilizarse tal cual como entrada de
  `jira-filters create` / `update`.
- Formato estable (claves ordenadas) para poder versionarlo y hacer diff.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def export_json(*, payload: Any, output_path: Path) -> Path:
    """Exporta `payload` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def load_json(path: Path) -> Any:
    """Lee un fichero JSON (p.ej. la definición de un filtro)."""

    return json.loads(path.read_text(encoding="utf-8"))
