"""Comparison options.

Options are built once, at the process boundary (CLI flags, a JSON config
file, or a plain dict from Python callers), and passed by value into
``compute_diff``.  The engine itself never reads environment variables.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from bundlediff.schemas import validate_data

#: Default significance threshold (1 %).
DEFAULT_PERCENT_CHANGE_MINIMUM: float = 0.01

_KEEP: Any = object()


class ConfigError(ValueError):
    """Invalid comparison options."""


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class BundleBudget:
    """Growth cap for one asset.

    Attributes:
        name: Canonical asset name (``manage-flag.js``), matched case-insensitively.
        budget: Maximum allowed growth, in whole percent.
    """

    name: str
    budget: int

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError("Bundle budget name must be a non-empty string")
        if isinstance(self.budget, bool) or not isinstance(self.budget, int) or self.budget < 0:
            raise ConfigError(
                f"Bundle budget for {self.name!r} must be a non-negative integer percent, "
                f"got {self.budget!r}"
            )

    def matches(self, asset_name: str) -> bool:
        return self.name.lower() == asset_name.lower()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "budget": self.budget}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> BundleBudget:
        budget = d["budget"]
        if isinstance(budget, float) and budget.is_integer():
            budget = int(budget)
        return cls(name=d["name"], budget=budget)


@dataclass(frozen=True)
class DiffOptions:
    """Thresholds and budgets for one comparison.

    Attributes:
        percent_change_minimum: Minimum ``abs(ratio)`` for a change to count
            (a fraction, ``0.05`` = 5 %).
        size_change_minimum: Minimum ``abs(delta)`` in bytes; ``None`` disables
            the absolute test.
        bundle_budgets: Growth caps keyed by canonical asset name.
    """

    percent_change_minimum: float = DEFAULT_PERCENT_CHANGE_MINIMUM
    size_change_minimum: float | None = None
    bundle_budgets: tuple[BundleBudget, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not _is_number(self.percent_change_minimum) or self.percent_change_minimum < 0:
            raise ConfigError(
                f"percent_change_minimum must be a finite, non-negative number, "
                f"got {self.percent_change_minimum!r}"
            )
        if self.size_change_minimum is not None and (
            not _is_number(self.size_change_minimum) or self.size_change_minimum < 0
        ):
            raise ConfigError(
                f"size_change_minimum must be a finite, non-negative number or None, "
                f"got {self.size_change_minimum!r}"
            )

        budgets = tuple(self.bundle_budgets)
        seen: dict[str, str] = {}
        for b in budgets:
            if not isinstance(b, BundleBudget):
                raise ConfigError(f"Expected BundleBudget, got {type(b).__name__}")
            key = b.name.lower()
            if key in seen:
                raise ConfigError(f"Duplicate bundle budget for {b.name!r} (already declared as {seen[key]!r})")
            seen[key] = b.name
        # frozen dataclass: normalise lists passed by callers
        object.__setattr__(self, "bundle_budgets", budgets)

    def budget_for(self, asset_name: str) -> BundleBudget | None:
        """First budget whose name matches *asset_name*, case-insensitively."""
        for b in self.bundle_budgets:
            if b.matches(asset_name):
                return b
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "percentChangeMinimum": self.percent_change_minimum,
            "sizeChangeMinimum": self.size_change_minimum,
            "bundleBudgets": [b.to_dict() for b in self.bundle_budgets],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any], *, source: str = "<options>") -> DiffOptions:
        errors = validate_data("config", d)
        if errors:
            raise ConfigError(f"Invalid options in {source}:\n" + "\n".join(f"  {e}" for e in errors))
        return cls(
            percent_change_minimum=d.get("percentChangeMinimum", DEFAULT_PERCENT_CHANGE_MINIMUM),
            size_change_minimum=d.get("sizeChangeMinimum"),
            bundle_budgets=tuple(BundleBudget.from_dict(b) for b in d.get("bundleBudgets", [])),
        )

    def replace(
        self,
        *,
        percent_change_minimum: float | None = None,
        size_change_minimum: float | None = _KEEP,
        extra_budgets: Iterable[BundleBudget] = (),
    ) -> DiffOptions:
        """Copy with overrides applied; extra budgets are appended.

        ``None`` keeps the current ``percent_change_minimum``.  For
        ``size_change_minimum`` an explicit ``None`` disables the absolute
        test; leave it out to keep the current value.
        """
        return DiffOptions(
            percent_change_minimum=(
                self.percent_change_minimum if percent_change_minimum is None else percent_change_minimum
            ),
            size_change_minimum=(
                self.size_change_minimum if size_change_minimum is _KEEP else size_change_minimum
            ),
            bundle_budgets=self.bundle_budgets + tuple(extra_budgets),
        )


def load_options(path: str | Path) -> DiffOptions:
    """Read ``DiffOptions`` from a JSON config file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigError: If the file is not valid JSON or fails validation.
    """
    fp = Path(path)
    if not fp.exists():
        raise FileNotFoundError(f"{fp} does not exist")
    try:
        data = json.loads(fp.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {fp}: {exc}") from exc
    return DiffOptions.from_dict(data, source=str(fp))


def parse_budget_arg(text: str) -> BundleBudget:
    """Parse a ``NAME=PERCENT`` command-line budget (``manage-flag.js=10``)."""
    name, sep, value = text.rpartition("=")
    name = name.strip()
    if not sep or not name:
        raise ConfigError(f"Budget must look like NAME=PERCENT, got {text!r}")
    try:
        budget = int(value.strip().rstrip("%"))
    except ValueError as exc:
        raise ConfigError(f"Budget percent for {name!r} must be an integer, got {value!r}") from exc
    return BundleBudget(name=name, budget=budget)
