"""One git commit per planned group."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from . import branch
from .group import WriteLog
from .paths import Paths
from .session import SessionId


def commit_per_group(
    repo_root: str | Path,
    paths: Paths,
    session_id: SessionId,
    group_ids: Iterable[str],
) -> None:
    """Commit each group's written files on the current branch, in order.

    Groups with an empty write log are skipped. Failures are not rolled back:
    groups committed before the failing one stay on the branch. A group whose
    files are unchanged from HEAD makes git refuse the empty commit.
    """
    for gid in group_ids:
        records = WriteLog.open(paths, session_id, gid).read_all()
        if not records:
            continue
        files = sorted({record.file_path for record in records})
        message = f"group {gid}: {len(records)} symbol writes"
        branch.commit_paths(repo_root, files, message)