"""Scaffolding of the `.dkod/` directory in a repository."""

from __future__ import annotations

from pathlib import Path

from . import branch
from .config import Config
from .errors import InvalidStateError, StorageError
from .paths import Paths


def init_repo(repo_root: str | Path, verify_cmd: str | None = None) -> None:
    """Create `.dkod/`, `.dkod/sessions/` and, if absent, `.dkod/config.toml`.

    Idempotent: an existing config is left untouched even when `verify_cmd`
    differs from what it holds.
    """
    root = Path(repo_root)
    if not root.exists():
        raise InvalidStateError(f"repo root does not exist: {root}")
    paths = Paths(root)
    sessions = paths.sessions_dir()
    try:
        sessions.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(sessions, exc) from exc

    if paths.config().exists():
        return

    main_branch = branch.detect_main(root)
    Config(main_branch=main_branch, verify_cmd=verify_cmd).save(paths.config())