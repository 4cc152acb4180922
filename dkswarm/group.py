"""Group specs and the append-only per-group write log."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import InvalidStateError, JsonFormatError, StorageError
from .paths import Paths
from .session import SessionId
from .storage import write_atomic


def _str_field(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


def _ensure_dir(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(directory, exc) from exc


@dataclass
class SymbolRef:
    qualified_name: str
    file_path: Path
    kind: str

    def __post_init__(self) -> None:
        self.file_path = Path(self.file_path)

    def _to_json(self) -> dict[str, str]:
        return {
            "qualified_name": self.qualified_name,
            "file_path": str(self.file_path),
            "kind": self.kind,
        }

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> "SymbolRef":
        return cls(
            qualified_name=_str_field(data, "qualified_name"),
            file_path=Path(_str_field(data, "file_path")),
            kind=_str_field(data, "kind"),
        )


class GroupStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GroupSpec:
    """One group's assignment, stored as `spec.json`."""

    id: str
    symbols: list[SymbolRef] = field(default_factory=list)
    agent_prompt: str = ""
    status: GroupStatus = GroupStatus.PENDING

    def _to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "symbols": [s._to_json() for s in self.symbols],
            "agent_prompt": self.agent_prompt,
            "status": GroupStatus(self.status).value,
        }

    def save(self, paths: Paths, sid: SessionId) -> None:
        path = paths.group_spec(str(sid), self.id)
        _ensure_dir(path.parent)
        write_atomic(path, json.dumps(self._to_json(), indent=2).encode("utf-8"))

    @classmethod
    def load(cls, paths: Paths, sid: SessionId, gid: str) -> "GroupSpec":
        path = paths.group_spec(str(sid), gid)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StorageError(path, exc) from exc
        try:
            data = json.loads(raw)
            symbols = data["symbols"]
            if not isinstance(symbols, list):
                raise TypeError("field 'symbols' must be a list")
            spec = cls(
                id=_str_field(data, "id"),
                symbols=[SymbolRef._from_json(s) for s in symbols],
                agent_prompt=_str_field(data, "agent_prompt"),
                status=GroupStatus(_str_field(data, "status")),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise JsonFormatError(path, exc) from exc
        if spec.id != gid:
            raise InvalidStateError(
                f"group id mismatch at {path}: expected {json.dumps(gid)}, "
                f"on-disk id is {json.dumps(spec.id)}"
            )
        return spec


@dataclass
class WriteRecord:
    symbol: str
    file_path: Path
    timestamp: str

    def __post_init__(self) -> None:
        self.file_path = Path(self.file_path)


class WriteLog:
    """Append-only JSONL log of agent symbol writes for one group."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def open(cls, paths: Paths, sid: SessionId, gid: str) -> "WriteLog":
        path = paths.group_writes(str(sid), gid)
        _ensure_dir(path.parent)
        return cls(path)

    def append(self, record: WriteRecord) -> None:
        line = json.dumps(
            {
                "symbol": record.symbol,
                "file_path": str(record.file_path),
                "timestamp": record.timestamp,
            },
            separators=(",", ":"),
        )
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            raise StorageError(self.path, exc) from exc

    def read_all(self) -> list[WriteRecord]:
        """Return every record in order; a never-written log is empty."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageError(self.path, exc) from exc
        records = []
        for line in text.splitlines():
            if not line.strip():
                continue
            try:
                data = json.loads(line)
                records.append(
                    WriteRecord(
                        symbol=_str_field(data, "symbol"),
                        file_path=Path(_str_field(data, "file_path")),
                        timestamp=_str_field(data, "timestamp"),
                    )
                )
            except (ValueError, KeyError, TypeError) as exc:
                raise JsonFormatError(self.path, exc) from exc
        return records