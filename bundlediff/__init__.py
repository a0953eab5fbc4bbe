"""bundlediff: compare webpack bundle analyzer reports between two builds."""

from __future__ import annotations

__version__ = "0.1.0"

from bundlediff.api import compare_reports
from bundlediff.config import BundleBudget, ConfigError, DiffOptions
from bundlediff.core.diff import affects_long_term_caching, compute_diff
from bundlediff.core.identity import resolve_identity

__all__ = [
    "__version__",
    "BundleBudget",
    "ConfigError",
    "DiffOptions",
    "affects_long_term_caching",
    "compare_reports",
    "compute_diff",
    "resolve_identity",
]
