from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dump_json(obj: Any) -> str:
    """Stable JSON text: insertion-ordered keys, 2-space indent, trailing newline."""
    return json.dumps(obj, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(obj), encoding="utf-8")


def append_text(path: Path, text: str) -> None:
    """
    Append to a file owned by someone else (CI host channels).

    Never creates parent directories and never truncates.
    """
    with path.open("a", encoding="utf-8", newline="\n") as f:
        f.write(text)


def tail(text: str | None, lines: int = 20) -> str:
    return "\n".join((text or "").splitlines()[-lines:])


def format_number(value: float) -> int | float:
    """Render whole-number floats as ints (30.0 -> 30) for artifacts and outputs."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
