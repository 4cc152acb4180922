"""Filesystem layout of the `.dkod/` directory."""

from __future__ import annotations

from pathlib import Path

from .errors import InvalidComponentError


def validate_id(component: str) -> str:
    """Check that `component` is exactly one plain path segment.

    Rejects empty strings, absolute paths, `.` and `..`, and anything with
    more than one segment. A trailing separator (``"foo/"``) is tolerated.
    Returns the component unchanged.
    """
    if not component or component.startswith("/"):
        raise InvalidComponentError(component)
    first, *rest = component.split("/")
    if first in (".", ".."):
        raise InvalidComponentError(component)
    if any(part not in ("", ".") for part in rest):
        raise InvalidComponentError(component)
    return component


class Paths:
    """Paths under `<repo>/.dkod/`, all derived from the repo root."""

    def __init__(self, repo_root: str | Path) -> None:
        self._root = Path(repo_root) / ".dkod"

    def root(self) -> Path:
        return self._root

    def config(self) -> Path:
        return self._root / "config.toml"

    def sessions_dir(self) -> Path:
        return self._root / "sessions"

    def session(self, sid: str) -> Path:
        validate_id(str(sid))
        return self.sessions_dir() / str(sid)

    def manifest(self, sid: str) -> Path:
        return self.session(sid) / "manifest.json"

    def groups_dir(self, sid: str) -> Path:
        return self.session(sid) / "groups"

    def group(self, sid: str, gid: str) -> Path:
        validate_id(gid)
        return self.groups_dir(sid) / gid

    def group_spec(self, sid: str, gid: str) -> Path:
        return self.group(sid, gid) / "spec.json"

    def group_writes(self, sid: str, gid: str) -> Path:
        return self.group(sid, gid) / "writes.jsonl"

    def conflicts_dir(self, sid: str) -> Path:
        return self.session(sid) / "conflicts"