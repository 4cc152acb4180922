"""Repository configuration stored in `.dkod/config.toml`."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from .errors import ConfigDecodeError, StorageError


@dataclass
class Config:
    """Per-repository settings."""

    main_branch: str
    verify_cmd: str | None = None

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(path, exc) from exc
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigDecodeError(path, exc) from exc

        main_branch = data.get("main_branch")
        if not isinstance(main_branch, str):
            raise ConfigDecodeError(path, "missing or non-string field `main_branch`")
        verify_cmd = data.get("verify_cmd")
        if verify_cmd is not None and not isinstance(verify_cmd, str):
            raise ConfigDecodeError(path, "field `verify_cmd` must be a string")
        return cls(main_branch=main_branch, verify_cmd=verify_cmd)

    def save(self, path: str | Path) -> None:
        path = Path(path)
        document: dict[str, str] = {"main_branch": self.main_branch}
        if self.verify_cmd is not None:
            document["verify_cmd"] = self.verify_cmd
        text = tomli_w.dumps(document)
        parent = path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(parent, exc) from exc
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StorageError(path, exc) from exc