"""Infrastructure adapter for JSON export targets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict


def save_summary_json(path: Path, summary: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
