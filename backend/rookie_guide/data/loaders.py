"""Bundled reference data shipped with the package."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_BASE_DIR = Path(__file__).resolve().parent

OFFICIAL_TEMPLATES_PATH = _BASE_DIR / "official_templates.json"


def load_json(path: Path) -> Any:
    """Return parsed JSON payload from disk."""

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
