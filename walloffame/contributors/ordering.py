from __future__ import annotations

from typing import Iterable, List, Tuple

from walloffame.contributors.schema import Contributor


def sort_key(c: Contributor) -> Tuple[str, str]:
    return (c.rollNumber, c.github)


def sort_contributors(records: Iterable[Contributor]) -> List[Contributor]:
    """Canonical order: rollNumber, then github. Returns a new list."""
    return sorted(records, key=sort_key)
