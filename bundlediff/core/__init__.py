"""Core subpackage: identity resolution, report ingestion, the diff engine and caching impact."""

from __future__ import annotations

__all__ = [
    "AssetDiff",
    "CachingImpact",
    "ChangeSummary",
    "Diff",
    "ParsedIdentity",
    "RawArtifact",
    "ReportFormatError",
    "affects_long_term_caching",
    "caching_impact",
    "change_summary",
    "compute_diff",
    "load_report",
    "parse_report",
    "resolve_identity",
]

from bundlediff.core.identity import ParsedIdentity, resolve_identity
from bundlediff.core.report import RawArtifact, ReportFormatError, load_report, parse_report
from bundlediff.core.diff import AssetDiff, Diff, affects_long_term_caching, compute_diff
from bundlediff.core.caching import CachingImpact, ChangeSummary, caching_impact, change_summary
