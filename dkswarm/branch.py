"""Lifecycle of `dk/<session>` git branches."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from .errors import GitError
from .paths import validate_id

AUTHOR_NAME = "dkod swarm"
AUTHOR_EMAIL = "swarm@example.com"


def _git(repo: str | Path, args: Sequence[str], *, with_identity: bool = False) -> str:
    """Run git in `repo` and return its trimmed stdout."""
    cmd = "git " + " ".join(args)
    env = None
    if with_identity:
        env = {
            **os.environ,
            "GIT_AUTHOR_NAME": AUTHOR_NAME,
            "GIT_AUTHOR_EMAIL": AUTHOR_EMAIL,
            "GIT_COMMITTER_NAME": AUTHOR_NAME,
            "GIT_COMMITTER_EMAIL": AUTHOR_EMAIL,
        }
    try:
        proc = subprocess.run(
            ["git", *args], cwd=repo, env=env, capture_output=True, check=False
        )
    except OSError as exc:
        raise GitError(cmd, str(exc)) from exc
    if proc.returncode != 0:
        raise GitError(cmd, proc.stderr.decode("utf-8", "replace"))
    return proc.stdout.decode("utf-8", "replace").strip()


def dk_branch_name(session_id: str) -> str:
    """Return the `dk/<session_id>` branch name."""
    return f"dk/{session_id}"


def detect_main(repo: str | Path) -> str:
    """Detect the default branch: current HEAD, then origin/HEAD, then `main`."""
    try:
        head = _git(repo, ["rev-parse", "--abbrev-ref", "HEAD"])
    except GitError:
        head = None
    if head and head != "HEAD":
        return head
    try:
        sym = _git(repo, ["symbolic-ref", "--short", "refs/remotes/origin/HEAD"])
    except GitError:
        sym = None
    if sym and sym.startswith("origin/"):
        return sym.removeprefix("origin/")
    return "main"


def create_dk_branch(repo: str | Path, main: str, session_id: str) -> None:
    """Create `dk/<session_id>` off `main` and check it out."""
    validate_id(str(session_id))
    _git(repo, ["checkout", "-b", dk_branch_name(str(session_id)), main])


def destroy_dk_branch(repo: str | Path, main: str, session_id: str) -> None:
    """Check out `main` and force-delete `dk/<session_id>`."""
    validate_id(str(session_id))
    _git(repo, ["checkout", main])
    _git(repo, ["branch", "-D", dk_branch_name(str(session_id))])


def commit_paths(repo: str | Path, paths: Iterable[str | Path], message: str) -> None:
    """Stage `paths` and commit them under the enforced identity."""
    _git(repo, ["add", "--", *(str(p) for p in paths)], with_identity=True)
    _git(repo, ["commit", "-m", message], with_identity=True)