"""Find blob identifiers embedded in another blob's content."""

from __future__ import annotations

import re
from collections.abc import Collection

_EMBEDDED_ID_RE = re.compile(r"(?<![0-9a-fA-F])[0-9a-fA-F]{64}(?![0-9a-fA-F])")


def find_referenced_ids(
    content: bytes,
    self_id: str,
    known_ids: Collection[str] | None = None,
) -> set[str]:
    """Return ids of other blobs mentioned in ``content``.

    Matches are case-insensitive 64-hex-digit runs. The blob's own id is excluded;
    when ``known_ids`` is given, only ids present in it are kept.
    """
    text = content.decode("utf-8", errors="replace")
    own = self_id.lower()
    known = {i.lower() for i in known_ids} if known_ids is not None else None

    found: set[str] = set()
    for match in _EMBEDDED_ID_RE.findall(text):
        candidate = match.lower()
        if candidate == own:
            continue
        if known is not None and candidate not in known:
            continue
        found.add(candidate)
    return found
