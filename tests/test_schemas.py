"""Tests for the JSON schemas."""

from __future__ import annotations

import json
from pathlib import Path

from jsonschema import Draft202012Validator

from bundlediff.schemas import SCHEMAS, export_schemas, validate_data


def test_schemas_are_valid_draft_2020_12():
    for schema in SCHEMAS.values():
        Draft202012Validator.check_schema(schema)


def test_report_schema_allows_extra_keys_and_folders():
    report = [
        {"label": "app.abcdef12.js", "isAsset": True, "statSize": 1, "parsedSize": 1,
         "gzipSize": 1, "groups": [], "isInitialByEntrypoint": {"main": True}},
        {"label": "src", "groups": []},
    ]
    assert validate_data("report", report) == []


def test_validate_data_reports_paths():
    errors = validate_data("config", {"bundleBudgets": [{"name": "a.js", "budget": "10"}]})
    assert errors
    assert errors[0].startswith("[bundleBudgets.0.budget]")


def test_validate_data_unknown_schema():
    assert validate_data("nope", {}) == ["Unknown schema: nope"]


def test_export_schemas(tmp_path: Path):
    written = export_schemas(tmp_path)
    assert {p.name for p in written} == {f"{name}.schema.json" for name in SCHEMAS}
    for fp in written:
        assert json.loads(fp.read_text(encoding="utf-8"))["type"] in ("array", "object")
