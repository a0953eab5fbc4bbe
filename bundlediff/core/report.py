"""Bundle analyzer report ingestion.

A report is the JSON list written by webpack-bundle-analyzer in ``json``
mode.  Only the ``label``, ``isAsset``, ``statSize``, ``parsedSize`` and
``gzipSize`` keys are read; anything else (``groups``, ``path``...) is
ignored.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from bundlediff.schemas import validate_data

logger = logging.getLogger("bundlediff.report")

_SIZE_KEYS = ("statSize", "parsedSize", "gzipSize")


class ReportFormatError(ValueError):
    """A build report (or one of its entries) does not have the expected shape."""


def _is_size(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


@dataclass(frozen=True)
class RawArtifact:
    """One entry of a bundle analyzer report.

    Attributes:
        label: Emitted filename (``app.3f9a1c2b.js``).
        is_asset: ``True`` for emitted files; module and folder entries are ``False``.
        stat_size: Size of the input modules before minification.
        parsed_size: Size of the emitted file, the figure every comparison uses.
        gzip_size: Size of the emitted file after gzip.
    """

    label: str
    is_asset: bool = True
    stat_size: float = 0
    parsed_size: float = 0
    gzip_size: float = 0

    def __post_init__(self) -> None:
        for attr in ("stat_size", "parsed_size", "gzip_size"):
            value = getattr(self, attr)
            if not _is_size(value):
                raise ReportFormatError(
                    f"{self.label}: {attr} must be a finite, non-negative number, got {value!r}"
                )

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "isAsset": self.is_asset,
            "statSize": self.stat_size,
            "parsedSize": self.parsed_size,
            "gzipSize": self.gzip_size,
        }

    @classmethod
    def from_dict(cls, d: Any, *, where: str = "entry") -> RawArtifact:
        if not isinstance(d, Mapping):
            raise ReportFormatError(f"{where}: expected an object, got {type(d).__name__}")

        label = d.get("label")
        if not isinstance(label, str):
            raise ReportFormatError(f"{where}: 'label' must be a string")

        is_asset = d.get("isAsset", False)
        if not isinstance(is_asset, bool):
            raise ReportFormatError(f"{where} ({label}): 'isAsset' must be a boolean")

        sizes: dict[str, float] = {}
        for key in _SIZE_KEYS:
            value = d.get(key)
            if value is None and not is_asset:
                value = 0
            if not _is_size(value):
                raise ReportFormatError(
                    f"{where} ({label}): '{key}' must be a finite, non-negative number, got {value!r}"
                )
            sizes[key] = value

        return cls(
            label=label,
            is_asset=is_asset,
            stat_size=sizes["statSize"],
            parsed_size=sizes["parsedSize"],
            gzip_size=sizes["gzipSize"],
        )


def coerce_artifacts(items: Any, *, source: str = "<report>") -> list[RawArtifact]:
    """Turn a report-shaped sequence into ``RawArtifact`` records.

    Accepts ``RawArtifact`` instances and JSON-shaped mappings, mixed freely.

    Raises:
        ReportFormatError: If *items* is not a list/tuple or any entry is malformed.
    """
    if not isinstance(items, (list, tuple)):
        raise ReportFormatError(
            f"{source}: expected a list of report entries, got {type(items).__name__}"
        )

    out: list[RawArtifact] = []
    for i, item in enumerate(items):
        if isinstance(item, RawArtifact):
            out.append(item)
        else:
            out.append(RawArtifact.from_dict(item, where=f"{source}[{i}]"))
    return out


def parse_report(data: Any, source: str = "<report>") -> list[RawArtifact]:
    """Validate decoded report JSON and convert it into ``RawArtifact`` records.

    Parameters:
        data: Decoded JSON (normally a list of dicts).
        source: Label used in error messages (usually the file path).

    Raises:
        ReportFormatError: On any schema violation.
    """
    errors = validate_data("report", data)
    if errors:
        shown = "\n".join(f"  {e}" for e in errors[:5])
        more = f"\n  ... and {len(errors) - 5} more" if len(errors) > 5 else ""
        raise ReportFormatError(f"Invalid bundle report {source}:\n{shown}{more}")

    artifacts = coerce_artifacts(data, source=source)
    logger.debug(
        "report.parsed source=%s entries=%d assets=%d",
        source, len(artifacts), sum(1 for a in artifacts if a.is_asset),
    )
    return artifacts


def load_report(path: str | Path) -> list[RawArtifact]:
    """Read and validate a bundle analyzer report file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ReportFormatError: If the file is not valid JSON or not a valid report.
    """
    fp = Path(path)
    if not fp.exists():
        raise FileNotFoundError(f"{fp} does not exist")
    try:
        data = json.loads(fp.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ReportFormatError(f"Invalid JSON in {fp}: {exc}") from exc
    return parse_report(data, source=str(fp))
