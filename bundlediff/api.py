"""bundlediff public Python API.

Provides the primary entrypoint:
  - ``compare_reports(...)`` → comparison result dict
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from bundlediff.config import DiffOptions
from bundlediff.core.caching import caching_impact, change_summary
from bundlediff.core.diff import affects_long_term_caching, compute_diff
from bundlediff.core.report import RawArtifact, load_report

logger = logging.getLogger("bundlediff")


def _load(report: str | Path | Sequence[Any]) -> Sequence[Any]:
    if isinstance(report, (str, Path)):
        return load_report(report)
    return report


def _coerce_options(options: DiffOptions | dict[str, Any] | None) -> DiffOptions:
    if options is None:
        return DiffOptions()
    if isinstance(options, DiffOptions):
        return options
    return DiffOptions.from_dict(options)


def compare_reports(
    base: str | Path | Sequence[RawArtifact | dict[str, Any]],
    head: str | Path | Sequence[RawArtifact | dict[str, Any]],
    options: DiffOptions | dict[str, Any] | None = None,
    output: str | Path | None = None,
) -> dict[str, Any]:
    """Compare the bundle analyzer reports of two builds.

    Parameters:
        base: Path to the base build's report, or its pre-loaded entries.
        head: Path to the head build's report, or its pre-loaded entries.
        options: ``DiffOptions``, a config dict (``percentChangeMinimum`` ...),
            or ``None`` for the defaults.
        output: Optional path; the result is also written there as JSON.

    Returns:
        ``{"diff", "affectsLongTermCaching", "caching", "summary", "options"}``.

    Raises:
        FileNotFoundError: A report path does not exist.
        ReportFormatError: A report is malformed.
        ConfigError: The options are invalid.
    """
    opts = _coerce_options(options)
    base_items = _load(base)
    head_items = _load(head)

    diff = compute_diff(base_items, head_items, opts)
    affects_caching = affects_long_term_caching(diff)

    result: dict[str, Any] = {
        "diff": diff.to_dict(),
        "affectsLongTermCaching": affects_caching,
        "caching": caching_impact(diff).to_dict(),
        "summary": change_summary(diff).to_dict(),
        "options": opts.to_dict(),
    }

    chunks = diff.chunks
    logger.info(
        "Compared bundles: %d bigger, %d smaller, %d added, %d removed, %d violations",
        len(chunks.bigger), len(chunks.smaller), len(chunks.added),
        len(chunks.removed), len(chunks.violations),
    )

    if output is not None:
        out = Path(output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(result, indent=2) + "\n", encoding="utf-8")
        logger.debug("Wrote comparison to %s", out)

    return result
