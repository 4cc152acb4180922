"""Session identifiers and the per-session manifest."""

from __future__ import annotations

import enum
import itertools
import json
import threading
import time
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidStateError, JsonFormatError, StorageError
from .paths import Paths
from .storage import write_atomic

_counter = itertools.count()
_counter_lock = threading.Lock()
_U64_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class SessionId:
    """Opaque session identifier; validated when turned into a path."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "SessionId":
        """Return `sess-<16 hex clock>-<16 hex counter>`, unique per process."""
        nanos = time.time_ns() & _U64_MASK
        with _counter_lock:
            count = next(_counter) & _U64_MASK
        return cls(f"sess-{nanos:016x}-{count:016x}")

    @classmethod
    def from_raw(cls, raw: str) -> "SessionId":
        """Wrap `raw` without validation."""
        return cls(raw)


class SessionStatus(str, enum.Enum):
    PLANNED = "planned"
    EXECUTING = "executing"
    COMMITTED = "committed"
    ABORTED = "aborted"


def _str_field(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


@dataclass
class Manifest:
    """Top-level record of a session, stored as `manifest.json`."""

    session_id: SessionId
    task_prompt: str
    created_at: str
    status: SessionStatus
    group_ids: list[str] = field(default_factory=list)

    def _to_json(self) -> dict[str, Any]:
        return {
            "session_id": str(self.session_id),
            "task_prompt": self.task_prompt,
            "created_at": self.created_at,
            "status": SessionStatus(self.status).value,
            "group_ids": list(self.group_ids),
        }

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> "Manifest":
        group_ids = data["group_ids"]
        if not isinstance(group_ids, list) or not all(isinstance(g, str) for g in group_ids):
            raise TypeError("field 'group_ids' must be a list of strings")
        return cls(
            session_id=SessionId(_str_field(data, "session_id")),
            task_prompt=_str_field(data, "task_prompt"),
            created_at=_str_field(data, "created_at"),
            status=SessionStatus(_str_field(data, "status")),
            group_ids=group_ids,
        )

    def save(self, paths: Paths) -> None:
        path = paths.manifest(str(self.session_id))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(path.parent, exc) from exc
        write_atomic(path, json.dumps(self._to_json(), indent=2).encode("utf-8"))

    @classmethod
    def load(cls, paths: Paths, sid: SessionId) -> "Manifest":
        expected = str(sid)
        path = paths.manifest(expected)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StorageError(path, exc) from exc
        try:
            manifest = cls._from_json(json.loads(raw))
        except (ValueError, KeyError, TypeError) as exc:
            raise JsonFormatError(path, exc) from exc
        if str(manifest.session_id) != expected:
            raise InvalidStateError(
                f"session id mismatch at {path}: expected {json.dumps(expected)}, "
                f"on-disk id is {json.dumps(str(manifest.session_id))}"
            )
        return manifest