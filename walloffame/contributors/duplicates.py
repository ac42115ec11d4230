from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from walloffame.contributors.schema import Contributor

_KEYS = (
    ("rollNumber", "rollNumber"),
    ("github", "GitHub username"),
)


def find_batch_duplicates(
    records: Sequence[Contributor],
    sources: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Collisions on rollNumber and on github within one batch.
    The first record claims a key; every later record presenting the same
    key is reported. Both keys are checked independently.
    """
    if sources is not None and len(sources) != len(records):
        raise ValueError("sources must be parallel to records")

    claimed: Dict[str, Dict[str, int]] = {attr: {} for attr, _ in _KEYS}
    errors: List[str] = []

    for i, rec in enumerate(records):
        for attr, label in _KEYS:
            value = getattr(rec, attr)
            seen = claimed[attr]
            if value not in seen:
                seen[value] = i
                continue
            msg = f"Duplicate {label} across submissions: {value}"
            if sources is not None:
                msg += f" ({sources[i]} conflicts with {sources[seen[value]]})"
            errors.append(msg)

    return errors


def find_existing_duplicates(
    candidate: Contributor, existing: Iterable[Contributor]
) -> List[str]:
    """Check one new record against the already-merged dataset only."""
    rolls = set()
    handles = set()
    for e in existing:
        rolls.add(str(e.rollNumber).lower())
        handles.add(str(e.github).lower())

    errors: List[str] = []
    if candidate.rollNumber in rolls:
        errors.append(
            f"Duplicate rollNumber: {candidate.rollNumber} is already in the list."
        )
    if candidate.github in handles:
        errors.append(
            f"Duplicate GitHub username: {candidate.github} is already in the list."
        )
    return errors
