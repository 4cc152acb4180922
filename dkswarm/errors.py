"""Exception hierarchy shared by the worktree and orchestrator layers."""

from __future__ import annotations

from pathlib import Path


class DkodError(Exception):
    """Base class for every error raised by dkswarm."""


class StorageError(DkodError):
    """A filesystem operation failed at a particular path."""

    def __init__(self, path: str | Path, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"io error at {self.path}: {cause}")


class ConfigDecodeError(DkodError):
    """A TOML configuration file could not be decoded."""

    def __init__(self, path: str | Path, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"toml decode error in {self.path}: {cause}")


class JsonFormatError(DkodError):
    """A JSON document on disk is malformed or has the wrong shape."""

    def __init__(self, path: str | Path, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"json error in {self.path}: {cause}")


class GitError(DkodError):
    """A git command could not be started or exited unsuccessfully."""

    def __init__(self, cmd: str, stderr: str) -> None:
        self.cmd = cmd
        self.stderr = stderr
        super().__init__(f"git command failed: {cmd}: {stderr}")


class InvalidStateError(DkodError):
    """On-disk or in-memory state is inconsistent."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"invalid state: {message}")


class NotInitialisedError(DkodError):
    """The repository has no `.dkod/` directory."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"not initialised: .dkod/ missing at {self.path}")


class InvalidComponentError(DkodError):
    """An identifier is not a single, safe path component."""

    def __init__(self, component: str) -> None:
        self.component = component
        super().__init__(f"invalid component: {component}")


class EngineError(DkodError):
    """The source parser failed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"engine parser error: {message}")


class SymbolNotFoundError(DkodError):
    """A named symbol does not exist in the given file."""

    def __init__(self, name: str, file: str | Path) -> None:
        self.name = name
        self.file = Path(file)
        super().__init__(f"symbol {name} not found in {self.file}")


class InvalidPartitionError(DkodError):
    """Partition input is invalid or ambiguous."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"partition input invalid: {message}")


class ReplaceFailedError(DkodError):
    """A symbol replacement could not be applied."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"replace failed: {message}")