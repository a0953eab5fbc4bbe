"""Asset-level diff between two bundle analyzer reports.

Assets are matched across builds by canonical name (content hash stripped),
then sorted into five mutually exclusive categories:

- ``added``: only in head.
- ``removed``: only in base.
- ``bigger`` / ``smaller``: in both, and the change passes the significance
  test (percentage AND, when configured, absolute bytes).
- ``negligible``: in both, change below either threshold.

``violations`` is an overlay on ``bigger``: the assets whose growth exceeds a
declared budget.  Its entries are the very same ``AssetDiff`` objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from bundlediff.config import DiffOptions
from bundlediff.core.identity import resolve_identity
from bundlediff.core.report import RawArtifact, coerce_artifacts

logger = logging.getLogger("bundlediff.diff")

CATEGORIES: tuple[str, ...] = ("added", "removed", "bigger", "smaller", "negligible")


@dataclass(frozen=True)
class ResolvedAsset:
    """An asset keyed by canonical name within one build."""

    name: str
    parsed_size: float
    stat_size: float
    gzip_size: float
    label: str = ""


@dataclass
class AssetDiff:
    """Size change of one asset between base and head.

    ``ratio`` is ``delta / base_size`` (``-1`` for removed, ``1`` for added,
    ``0`` when a matched asset had a base size of zero).  ``budget`` is only
    set on entries that violate a bundle budget.
    """

    name: str
    base_size: float
    head_size: float
    delta: float
    ratio: float
    budget: int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "baseSize": self.base_size,
            "headSize": self.head_size,
            "delta": self.delta,
            "ratio": self.ratio,
        }
        if self.budget is not None:
            d["budget"] = self.budget
        return d


@dataclass
class TotalBytes:
    base: float = 0
    head: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {"base": self.base, "head": self.head}


@dataclass
class Chunks:
    added: list[AssetDiff] = field(default_factory=list)
    removed: list[AssetDiff] = field(default_factory=list)
    bigger: list[AssetDiff] = field(default_factory=list)
    smaller: list[AssetDiff] = field(default_factory=list)
    negligible: list[AssetDiff] = field(default_factory=list)
    violations: list[AssetDiff] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            key: [a.to_dict() for a in getattr(self, key)]
            for key in (*CATEGORIES, "violations")
        }


@dataclass
class Diff:
    """Result of comparing two builds.

    ``total_bytes`` only counts assets present in both builds, so it tracks
    like-for-like churn rather than total payload.
    """

    total_bytes: TotalBytes = field(default_factory=TotalBytes)
    chunks: Chunks = field(default_factory=Chunks)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalBytes": self.total_bytes.to_dict(),
            "chunks": self.chunks.to_dict(),
        }


# ======================================================================
# Reconciliation
# ======================================================================


def resolve_assets(artifacts: Sequence[RawArtifact], side: str) -> dict[str, ResolvedAsset]:
    """Map canonical name -> asset for one build.

    Non-asset entries are dropped.  Labels that do not resolve are skipped
    with a warning.  When two labels share a canonical name the later one
    wins and a warning names both.
    """
    by_name: dict[str, ResolvedAsset] = {}
    for item in artifacts:
        if not item.is_asset:
            continue

        parsed = resolve_identity(item.label)
        if parsed is None:
            logger.warning('Skipping unparseable asset in %s: "%s"', side, item.label)
            continue

        previous = by_name.get(parsed.canonical_name)
        if previous is not None:
            logger.warning(
                "Duplicate asset %s in %s: %r replaces %r",
                parsed.canonical_name, side, item.label, previous.label,
            )

        by_name[parsed.canonical_name] = ResolvedAsset(
            name=parsed.canonical_name,
            parsed_size=item.parsed_size,
            stat_size=item.stat_size,
            gzip_size=item.gzip_size,
            label=item.label,
        )
    return by_name


def change_ratio(base_size: float, head_size: float) -> float:
    """Signed proportional change relative to *base_size*; ``0.0`` for a zero base."""
    if base_size == 0:
        return 0.0
    return (head_size - base_size) / base_size


def is_significant(ratio: float, delta: float, options: DiffOptions) -> bool:
    """Both thresholds must agree for a change to be reported."""
    if abs(ratio) < options.percent_change_minimum:
        return False
    if options.size_change_minimum is not None and abs(delta) < options.size_change_minimum:
        return False
    return True


def compute_diff(
    base: Sequence[RawArtifact | dict[str, Any]],
    head: Sequence[RawArtifact | dict[str, Any]],
    options: DiffOptions | None = None,
) -> Diff:
    """Compare two builds' report entries.

    Parameters:
        base: Report entries of the base build.
        head: Report entries of the head build.
        options: Thresholds and budgets (defaults to ``DiffOptions()``).

    Returns:
        A fully populated ``Diff``.

    Raises:
        ReportFormatError: If either input is not a well-formed list of entries.
            Raised before any part of the result is built.
    """
    if options is None:
        options = DiffOptions()

    base_items = coerce_artifacts(base, source="base")
    head_items = coerce_artifacts(head, source="head")

    by_name = {
        "base": resolve_assets(base_items, "base"),
        "head": resolve_assets(head_items, "head"),
    }

    diff = Diff()
    chunks = diff.chunks

    for name, base_asset in by_name["base"].items():
        base_size = base_asset.parsed_size
        head_asset = by_name["head"].get(name)

        if head_asset is None:
            chunks.removed.append(AssetDiff(
                name=name,
                base_size=base_size,
                head_size=0,
                delta=-base_size,
                ratio=-1,
            ))
            continue

        head_size = head_asset.parsed_size
        delta = head_size - base_size
        ratio = change_ratio(base_size, head_size)
        entry = AssetDiff(name=name, base_size=base_size, head_size=head_size, delta=delta, ratio=ratio)

        diff.total_bytes.base += base_size
        diff.total_bytes.head += head_size

        significant = is_significant(ratio, delta, options)
        if significant and ratio > 0:
            chunks.bigger.append(entry)
        elif significant and ratio < 0:
            chunks.smaller.append(entry)
        else:
            chunks.negligible.append(entry)

    for name, head_asset in by_name["head"].items():
        if name not in by_name["base"]:
            chunks.added.append(AssetDiff(
                name=name,
                base_size=0,
                head_size=head_asset.parsed_size,
                delta=head_asset.parsed_size,
                ratio=1,
            ))

    _apply_budgets(chunks, options)

    logger.debug(
        "diff.computed added=%d removed=%d bigger=%d smaller=%d negligible=%d violations=%d",
        len(chunks.added), len(chunks.removed), len(chunks.bigger),
        len(chunks.smaller), len(chunks.negligible), len(chunks.violations),
    )
    return diff


def _apply_budgets(chunks: Chunks, options: DiffOptions) -> None:
    """Stamp and collect ``bigger`` assets whose growth exceeds their budget."""
    if not chunks.bigger or not options.bundle_budgets:
        return

    for asset in chunks.bigger:
        budget = options.budget_for(asset.name)
        if budget is None:
            continue
        if asset.ratio * 100 > budget.budget:
            asset.budget = budget.budget
            chunks.violations.append(asset)


def affects_long_term_caching(diff: Diff) -> bool:
    """Whether deploying head invalidates any long-term cached asset.

    Any byte change alters the content hash, so a negligible entry with a
    nonzero delta still counts.
    """
    return (
        len(diff.chunks.added) > 0
        or len(diff.chunks.bigger) > 0
        or len(diff.chunks.smaller) > 0
        or any(abs(a.delta) > 0 for a in diff.chunks.negligible)
    )
