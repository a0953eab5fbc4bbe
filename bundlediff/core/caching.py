"""Long-term caching impact and aggregate deltas for a ``Diff``.

Browsers cache hashed assets forever; any byte change produces a new hash,
so the user re-downloads the whole file.  ``caching_impact`` splits the head
build's bytes into invalidated, added and still-cached portions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

from bundlediff.core.diff import AssetDiff, Diff


def _head_bytes(assets: Iterable[AssetDiff]) -> float:
    return sum(a.head_size for a in assets)


def _delta_sum(assets: Iterable[AssetDiff]) -> float:
    return sum(a.delta for a in assets)


@dataclass(frozen=True)
class CachingImpact:
    """Bytes a returning visitor must download once head is deployed."""

    invalidated_count: int
    invalidated_bytes: float
    added_count: int
    added_bytes: float
    cached_bytes: float

    @property
    def uncached_bytes(self) -> float:
        return self.invalidated_bytes + self.added_bytes

    @property
    def total_bytes(self) -> float:
        return self.uncached_bytes + self.cached_bytes

    def fraction(self, part: float) -> float:
        """*part* as a share of ``total_bytes``; ``0.0`` when there are no bytes at all."""
        total = self.total_bytes
        if total == 0:
            return 0.0
        return part / total

    def to_dict(self) -> dict[str, Any]:
        return {
            "invalidatedCount": self.invalidated_count,
            "invalidatedBytes": self.invalidated_bytes,
            "addedCount": self.added_count,
            "addedBytes": self.added_bytes,
            "cachedBytes": self.cached_bytes,
            "uncachedBytes": self.uncached_bytes,
            "totalBytes": self.total_bytes,
            "fractions": {
                "invalidated": self.fraction(self.invalidated_bytes),
                "added": self.fraction(self.added_bytes),
                "uncached": self.fraction(self.uncached_bytes),
                "cached": self.fraction(self.cached_bytes),
            },
        }


def caching_impact(diff: Diff) -> CachingImpact:
    chunks = diff.chunks
    changed_negligible = [a for a in chunks.negligible if abs(a.delta) > 0]
    unchanged = [a for a in chunks.negligible if a.delta == 0]

    invalidated = [*chunks.bigger, *chunks.smaller, *changed_negligible]
    return CachingImpact(
        invalidated_count=len(invalidated),
        invalidated_bytes=_head_bytes(invalidated),
        added_count=len(chunks.added),
        added_bytes=_head_bytes(chunks.added),
        cached_bytes=_head_bytes(unchanged),
    )


@dataclass(frozen=True)
class ChangeSummary:
    """Summed deltas per category.

    ``total`` excludes negligible entries.
    """

    bigger: float
    smaller: float
    added: float
    removed: float
    total_bytes_delta: float

    @property
    def total(self) -> float:
        return self.bigger + self.smaller + self.added + self.removed

    def to_dict(self) -> dict[str, Any]:
        return {
            "bigger": self.bigger,
            "smaller": self.smaller,
            "added": self.added,
            "removed": self.removed,
            "total": self.total,
            "totalBytesDelta": self.total_bytes_delta,
        }


def change_summary(diff: Diff) -> ChangeSummary:
    chunks = diff.chunks
    return ChangeSummary(
        bigger=_delta_sum(chunks.bigger),
        smaller=_delta_sum(chunks.smaller),
        added=_delta_sum(chunks.added),
        removed=_delta_sum(chunks.removed),
        total_bytes_delta=diff.total_bytes.head - diff.total_bytes.base,
    )


# ======================================================================
# Ordering helpers (return new lists; the diff is never reordered)
# ======================================================================


def sort_by_delta(assets: Iterable[AssetDiff]) -> list[AssetDiff]:
    """Largest absolute delta first."""
    return sorted(assets, key=lambda a: abs(a.delta), reverse=True)


def sort_by_size(assets: Iterable[AssetDiff], side: Literal["base", "head"] = "head") -> list[AssetDiff]:
    """Largest ``head_size`` (or ``base_size``) first."""
    if side == "base":
        return sorted(assets, key=lambda a: a.base_size, reverse=True)
    return sorted(assets, key=lambda a: a.head_size, reverse=True)
