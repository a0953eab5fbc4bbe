"""JSON Schema definitions for bundlediff inputs and outputs.

Each schema is a Python dict following JSON Schema Draft 2020-12.
A convenience function ``validate_data`` checks decoded JSON against a
schema by name.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

# ======================================================================
# Schemas
# ======================================================================

_SIZE: dict[str, Any] = {"type": "number", "minimum": 0}

REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Bundle Analyzer Report",
    "description": "JSON report emitted by webpack-bundle-analyzer (analyzerMode: json).",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["label"],
        "properties": {
            "label": {"type": "string"},
            "isAsset": {"type": "boolean"},
            "statSize": _SIZE,
            "parsedSize": _SIZE,
            "gzipSize": _SIZE,
        },
        "if": {
            "properties": {"isAsset": {"const": True}},
            "required": ["isAsset"],
        },
        "then": {"required": ["statSize", "parsedSize", "gzipSize"]},
        "additionalProperties": True,
    },
}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "bundlediff Options",
    "type": "object",
    "properties": {
        "percentChangeMinimum": {"type": "number", "minimum": 0},
        "sizeChangeMinimum": {"type": ["number", "null"], "minimum": 0},
        "bundleBudgets": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "budget"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "budget": {"type": "integer", "minimum": 0},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}

_ASSET_DIFF: dict[str, Any] = {
    "type": "object",
    "required": ["name", "baseSize", "headSize", "delta", "ratio"],
    "properties": {
        "name": {"type": "string"},
        "baseSize": {"type": "number"},
        "headSize": {"type": "number"},
        "delta": {"type": "number"},
        "ratio": {"type": "number"},
        "budget": {"type": "integer"},
    },
    "additionalProperties": False,
}

DIFF_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "bundlediff Diff",
    "type": "object",
    "required": ["totalBytes", "chunks"],
    "properties": {
        "totalBytes": {
            "type": "object",
            "required": ["base", "head"],
            "properties": {"base": {"type": "number"}, "head": {"type": "number"}},
        },
        "chunks": {
            "type": "object",
            "required": ["added", "removed", "bigger", "smaller", "negligible", "violations"],
            "properties": {
                key: {"type": "array", "items": _ASSET_DIFF}
                for key in ("added", "removed", "bigger", "smaller", "negligible", "violations")
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

RESULT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "bundlediff Comparison Result",
    "type": "object",
    "required": ["diff", "affectsLongTermCaching", "caching", "summary"],
    "properties": {
        "diff": {k: v for k, v in DIFF_SCHEMA.items() if k != "$schema"},
        "affectsLongTermCaching": {"type": "boolean"},
        "caching": {
            "type": "object",
            "required": [
                "invalidatedCount", "invalidatedBytes", "addedCount",
                "addedBytes", "cachedBytes", "uncachedBytes", "totalBytes",
            ],
        },
        "summary": {
            "type": "object",
            "required": ["bigger", "smaller", "added", "removed", "total", "totalBytesDelta"],
        },
        "options": {"type": "object"},
    },
    "additionalProperties": True,
}

SCHEMAS: dict[str, dict[str, Any]] = {
    "report": REPORT_SCHEMA,
    "config": CONFIG_SCHEMA,
    "diff": DIFF_SCHEMA,
    "result": RESULT_SCHEMA,
}


# ======================================================================
# Validation
# ======================================================================


def validate_data(schema_name: str, data: Any) -> list[str]:
    """Return every validation error for *data*, prefixed with its JSON path."""
    schema = SCHEMAS.get(schema_name)
    if schema is None:
        return [f"Unknown schema: {schema_name}"]
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    msgs: list[str] = []
    for err in errors:
        path = ".".join(str(p) for p in err.absolute_path) or "(root)"
        msgs.append(f"[{path}] {err.message}")
    return msgs


def export_schemas(out_dir: str | Path) -> list[Path]:
    """Write all JSON schemas as standalone files."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, schema in SCHEMAS.items():
        fp = out / f"{name}.schema.json"
        fp.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")
        written.append(fp)
    return written
