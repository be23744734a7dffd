"""Reading JSON request files for batch commands."""

import json
from pathlib import Path
from typing import Any


def load_json(path: str) -> Any:
    """Load a JSON document.

    Raises:
        ValueError: If the file is not valid JSON
    """
    with Path(path).open(encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")


def task_list(document: Any) -> Any:
    """Tasks of a document that is either a task list or ``{"tasks": [...]}``."""
    if isinstance(document, dict):
        return document.get("tasks", [])
    return document
