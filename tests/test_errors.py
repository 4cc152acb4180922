from pathlib import Path

import pytest

from dkswarm.errors import (
    ConfigDecodeError,
    DkodError,
    EngineError,
    GitError,
    InvalidComponentError,
    InvalidPartitionError,
    InvalidStateError,
    JsonFormatError,
    NotInitialisedError,
    ReplaceFailedError,
    StorageError,
    SymbolNotFoundError,
)


def test_git_error_carries_command_and_stderr():
    err = GitError("git status", "boom")
    assert err.cmd == "git status"
    assert err.stderr == "boom"
    assert str(err).startswith("git command failed: ")
    assert "git status" in str(err) and "boom" in str(err)


def test_storage_error_mentions_path_and_cause():
    cause = FileNotFoundError("missing")
    err = StorageError(Path("/a/b.json"), cause)
    assert err.path == Path("/a/b.json")
    assert err.cause is cause
    assert str(err).startswith("io error at ")
    assert "missing" in str(err)


def test_invalid_state_message():
    assert str(InvalidStateError("x")) == "invalid state: x"


def test_invalid_component_keeps_component():
    err = InvalidComponentError("../escape")
    assert err.component == "../escape"
    assert str(err) == "invalid component: ../escape"


def test_symbol_not_found_message():
    err = SymbolNotFoundError("foo", Path("x.rs"))
    assert err.name == "foo"
    assert str(err) == "symbol foo not found in x.rs"


def test_not_initialised_message():
    err = NotInitialisedError(Path("/r"))
    assert str(err) == f"not initialised: .dkod/ missing at {Path('/r')}"


@pytest.mark.parametrize(
    "error_class, args, prefix",
    [
        (EngineError, ("bad",), "engine parser error: "),
        (InvalidPartitionError, ("bad",), "partition input invalid: "),
        (ReplaceFailedError, ("bad",), "replace failed: "),
        (ConfigDecodeError, ("c.toml", "bad"), "toml decode error in "),
        (JsonFormatError, ("c.json", "bad"), "json error in "),
    ],
)
def test_all_errors_caught_by_base(error_class, args, prefix):
    err = error_class(*args)
    message = str(err)
    assert message.startswith(prefix)
    assert message.endswith("bad")
    with pytest.raises(DkodError) as info:
        raise err
    assert info.value is err