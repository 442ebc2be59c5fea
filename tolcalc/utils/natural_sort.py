"""Natural (numeric-aware) string ordering, e.g. ``h9`` before ``h10``."""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple, Union

_CHUNK_RE = re.compile(r"(\d+)")


def natural_key(text: str) -> Tuple[Tuple[int, Union[int, str]], ...]:
    """Sort key: digit runs compare as integers, other text case-insensitively."""
    parts = []
    for chunk in _CHUNK_RE.split(text):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk.casefold()))
    return tuple(parts)


def natural_sorted(items: Iterable[str]) -> List[str]:
    # sorted() is stable, so labels equal under the key keep their input order
    return sorted(items, key=natural_key)


__all__ = ["natural_key", "natural_sorted"]
