"""CLI input JSON loading."""

from __future__ import annotations

import json
from typing import Any

import click


def load_json_file(filepath: str) -> Any:
    """Parse *filepath* as JSON, turning decode errors into ``click.ClickException``."""
    try:
        with open(filepath, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {filepath}: {exc}") from exc
