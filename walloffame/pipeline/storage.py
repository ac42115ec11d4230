from __future__ import annotations

import json
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Union

from walloffame.contributors.normalize import normalize_contributor
from walloffame.contributors.schema import Contributor


@dataclass(frozen=True)
class Submission:
    """Raw submission file: its base name and undecoded contents."""

    name: str
    content: Union[bytes, str]


def list_submission_files(submissions_dir: Path) -> List[Path]:
    if not submissions_dir.is_dir():
        return []
    return sorted(p for p in submissions_dir.glob("*.json") if p.is_file())


def read_submissions(paths: Iterable[Path]) -> List[Submission]:
    return [Submission(name=p.name, content=p.read_bytes()) for p in paths]


def load_contributors(path: Path) -> List[Contributor]:
    """
    Read the canonical dataset leniently: a missing or unreadable file, or
    anything that is not a JSON list, counts as empty.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return []
    if not isinstance(data, list):
        return []
    return [normalize_contributor(item) for item in data if isinstance(item, dict)]


def dump_contributors(records: Iterable[Contributor]) -> str:
    payload = [c.model_dump() for c in records]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_texts_atomically(outputs: Dict[Path, str]) -> None:
    """
    Stage every output in a temp file next to its target, then move all of
    them into place. If staging fails no target is touched.
    """
    staged: Dict[Path, str] = {}
    try:
        for target, text in outputs.items():
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
            )
            staged[target] = tmp
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            # mkstemp creates 0600; keep the target's mode or the umask default
            if target.exists():
                shutil.copymode(target, tmp)
            else:
                os.chmod(tmp, 0o666 & ~_current_umask())
        for target, tmp in staged.items():
            os.replace(tmp, target)
    finally:
        for tmp in staged.values():
            if os.path.isfile(tmp):
                try:
                    os.remove(tmp)
                except OSError:
                    pass
