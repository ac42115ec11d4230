from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_START_MARKER = "<!-- WALL_OF_FAME_START -->"
DEFAULT_END_MARKER = "<!-- WALL_OF_FAME_END -->"


@dataclass(frozen=True)
class Markers:
    start: str = DEFAULT_START_MARKER
    end: str = DEFAULT_END_MARKER


def find_region(document: str, markers: Markers) -> Optional[Tuple[int, int]]:
    """
    (start, end) offsets of the first start marker and the first end marker,
    or None if either is missing or they are out of order.
    """
    start = document.find(markers.start)
    end = document.find(markers.end)
    if start == -1 or end == -1 or end < start:
        return None
    return start, end


def replace_between_markers(
    document: str, start_marker: str, end_marker: str, replacement: str
) -> str:
    """
    Replace whatever sits between the two markers with `replacement`.
    Markers themselves are kept. If they are missing (first run), they are
    appended together with the replacement to the end of the document; a
    stray or out-of-order marker is dropped first so only one pair remains.
    Running it again with the same replacement is a no-op.
    """
    region = find_region(document, Markers(start_marker, end_marker))
    if region is None:
        rest = document.replace(start_marker, "").replace(end_marker, "").strip()
        return f"{rest}\n\n{start_marker}\n{replacement}\n{end_marker}\n"

    start, end = region
    before = document[: start + len(start_marker)]
    after = document[end:]
    return f"{before}\n{replacement}\n{after}"


def region_text(document: str, markers: Markers) -> Optional[str]:
    region = find_region(document, markers)
    if region is None:
        return None
    start, end = region
    return document[start + len(markers.start) : end]
