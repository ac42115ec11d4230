from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from walloffame.contributors.schema import Contributor

_RE_WHITESPACE = re.compile(r"\s+")


def _as_text(value: Any) -> str:
    # falsy values (None, "", 0, False, empty containers) become ""
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    return str(value)


def title_case(name: str) -> str:
    """
    Collapse whitespace, then upper-case the first letter of every word and
    lower-case the rest. "jANE   o'brien" -> "Jane O'brien".
    """
    words = _RE_WHITESPACE.sub(" ", name).strip().split(" ")
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def normalize_contributor(raw: Any) -> Contributor:
    """
    Turn an untrusted, decoded submission into a Contributor.
    Never raises: anything that is not a mapping is treated as empty.
    """
    data = raw if isinstance(raw, Mapping) else {}

    full = _as_text(data.get("fullName")).strip()
    roll = _as_text(data.get("rollNumber")).strip()
    gh = _as_text(data.get("github")).strip()

    return Contributor(
        fullName=title_case(full),
        rollNumber=roll.lower(),
        github=gh.lower(),
    )
