"""Exportación JSON de resultados.

Por qué JSON:
- Es el mismo contrato que sirven los endpoints `/api/douban/*`.
- Permite guardar un listado sin depender de la UI.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import DoubanResult


def export_result_json(*, result: DoubanResult, output_path: Path) -> Path:
    """Exporta `DoubanResult` a JSON UTF-8 (`code`, `message`, `list`)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(result.to_payload(), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path
