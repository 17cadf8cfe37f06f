from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_document(path: Path) -> Any:
    """Load a structured document: JSON for ``.json`` files, YAML otherwise."""
    if path.suffix.lower() == ".json":
        return load_json(path)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def dumps_schema(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def write_schema(path: Path, payload: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_schema(payload) + "\n", encoding="utf-8")
    return path
