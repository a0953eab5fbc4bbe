"""Tests for comparison options."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bundlediff.config import (
    DEFAULT_PERCENT_CHANGE_MINIMUM,
    BundleBudget,
    ConfigError,
    DiffOptions,
    load_options,
    parse_budget_arg,
)


def test_defaults():
    opts = DiffOptions()
    assert opts.percent_change_minimum == DEFAULT_PERCENT_CHANGE_MINIMUM
    assert opts.size_change_minimum is None
    assert opts.bundle_budgets == ()


def test_budgets_are_normalised_to_tuple():
    opts = DiffOptions(bundle_budgets=[BundleBudget("app.js", 10)])
    assert isinstance(opts.bundle_budgets, tuple)
    assert opts.budget_for("APP.JS") == BundleBudget("app.js", 10)
    assert opts.budget_for("vendor.js") is None


def test_duplicate_budget_names_rejected():
    with pytest.raises(ConfigError, match="Duplicate"):
        DiffOptions(bundle_budgets=[BundleBudget("app.js", 10), BundleBudget("App.js", 20)])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"percent_change_minimum": -0.1},
        {"percent_change_minimum": "5%"},
        {"percent_change_minimum": True},
        {"percent_change_minimum": float("nan")},
        {"size_change_minimum": -1},
        {"size_change_minimum": float("inf")},
        {"bundle_budgets": [{"name": "app.js", "budget": 10}]},
    ],
)
def test_invalid_options_rejected(kwargs):
    with pytest.raises(ConfigError):
        DiffOptions(**kwargs)


@pytest.mark.parametrize("budget", [-1, 1.5, "10", True])
def test_invalid_budget_rejected(budget):
    with pytest.raises(ConfigError):
        BundleBudget("app.js", budget)


def test_from_dict():
    opts = DiffOptions.from_dict({
        "percentChangeMinimum": 0.05,
        "sizeChangeMinimum": 1000,
        "bundleBudgets": [{"name": "manage-flag.js", "budget": 10}],
    })
    assert opts.percent_change_minimum == 0.05
    assert opts.size_change_minimum == 1000
    assert opts.bundle_budgets == (BundleBudget("manage-flag.js", 10),)
    assert DiffOptions.from_dict(opts.to_dict()) == opts


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigError, match="percentMin"):
        DiffOptions.from_dict({"percentMin": 0.05})


def test_from_dict_rejects_duplicate_budgets():
    with pytest.raises(ConfigError):
        DiffOptions.from_dict({
            "bundleBudgets": [{"name": "a.js", "budget": 1}, {"name": "A.JS", "budget": 2}],
        })


def test_replace_overrides_and_appends():
    base = DiffOptions(percent_change_minimum=0.05, bundle_budgets=[BundleBudget("a.js", 1)])
    opts = base.replace(size_change_minimum=200, extra_budgets=[BundleBudget("b.js", 2)])
    assert opts.percent_change_minimum == 0.05
    assert opts.size_change_minimum == 200
    assert [b.name for b in opts.bundle_budgets] == ["a.js", "b.js"]
    assert base.size_change_minimum is None


def test_replace_keeps_or_clears_size_minimum():
    base = DiffOptions(size_change_minimum=1000)
    assert base.replace(percent_change_minimum=0.1).size_change_minimum == 1000
    assert base.replace(size_change_minimum=None).size_change_minimum is None


def test_load_options(tmp_path: Path):
    fp = tmp_path / "bundlediff.json"
    fp.write_text(json.dumps({"percentChangeMinimum": 0.1}), encoding="utf-8")
    assert load_options(fp).percent_change_minimum == 0.1

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_options(bad)

    with pytest.raises(FileNotFoundError):
        load_options(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("manage-flag.js=10", BundleBudget("manage-flag.js", 10)),
        ("app.css = 5%", BundleBudget("app.css", 5)),
    ],
)
def test_parse_budget_arg(text, expected):
    assert parse_budget_arg(text) == expected


@pytest.mark.parametrize("text", ["app.js", "=10", "app.js=ten", "app.js=-3"])
def test_parse_budget_arg_invalid(text):
    with pytest.raises(ConfigError):
        parse_budget_arg(text)
