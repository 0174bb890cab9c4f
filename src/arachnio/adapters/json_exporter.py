"""Exportación JSON de resultados.

Escribe cualquier respuesta del cliente con los nombres del cable, para poder
reutilizarla en otras herramientas o como fixture.
"""

from __future__ import annotations

import json
from pathlib import Path

from arachnio.core.domain.models import ArachnioModel


def export_result_json(*, result: ArachnioModel, output_path: Path) -> Path:
    """Exporta `result` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json", by_alias=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
