"""Crash-safe file writes."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import StorageError


def write_atomic(path: str | Path, data: bytes) -> None:
    """Write `data` to a sibling `.tmp` file, then rename it onto `path`.

    A crash mid-write leaves any existing file at `path` untouched. Only one
    writer per path is supported; concurrent writers race on the tmp name.
    """
    target = Path(path)
    tmp = Path(f"{target}.tmp")
    try:
        tmp.write_bytes(data)
    except OSError as exc:
        raise StorageError(tmp, exc) from exc
    try:
        os.replace(tmp, target)
    except OSError as exc:
        raise StorageError(target, exc) from exc