"""Stable asset identities.

Bundlers append a content hash to every emitted file (``app.3f9a1c2b.js``),
so the same logical asset has a different filename in every build.  This
module strips that segment and yields a canonical name (``app.js``) that can
be matched across builds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

# The hashed pattern must be tried first; the plain one also matches hashed names.
_HASHED_NAME_RE = re.compile(
    r"^(?P<asset_name>[a-zA-Z0-9.\-_]+)\.(?P<hash>[a-zA-Z0-9]{6,32})\.(?P<extension>js|css)$"
)
_PLAIN_NAME_RE = re.compile(r"^(?P<asset_name>[a-zA-Z0-9.\-_]+)\.(?P<extension>js|css)$")


@dataclass(frozen=True)
class ParsedIdentity:
    """Logical identity of an emitted asset.

    Attributes:
        asset_name: Name without hash or extension (``chunk-common``).
        extension: ``"js"`` or ``"css"``.
        canonical_name: ``asset_name + "." + extension``.
    """

    asset_name: str
    extension: str
    canonical_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "assetName": self.asset_name,
            "extension": self.extension,
            "canonicalName": self.canonical_name,
        }


def resolve_identity(filename: str) -> ParsedIdentity | None:
    """Resolve *filename* to its stable identity, or ``None`` if it is not a bundle asset."""
    match = _HASHED_NAME_RE.match(filename) or _PLAIN_NAME_RE.match(filename)
    if match is None:
        return None

    asset_name = match.group("asset_name")
    extension = match.group("extension")
    return ParsedIdentity(
        asset_name=asset_name,
        extension=extension,
        canonical_name=f"{asset_name}.{extension}",
    )
