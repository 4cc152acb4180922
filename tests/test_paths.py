from pathlib import Path

import pytest

from dkswarm.errors import InvalidComponentError
from dkswarm.paths import Paths, validate_id


def test_paths_resolve_under_dkod_dir():
    repo = Path("/tmp/fake-repo")
    p = Paths(repo)
    assert p.root() == repo / ".dkod"
    assert p.config() == repo / ".dkod/config.toml"
    assert p.sessions_dir() == repo / ".dkod/sessions"
    assert p.session("abc") == repo / ".dkod/sessions/abc"
    assert p.manifest("abc") == repo / ".dkod/sessions/abc/manifest.json"
    assert p.groups_dir("abc") == repo / ".dkod/sessions/abc/groups"
    assert p.group("abc", "g1") == repo / ".dkod/sessions/abc/groups/g1"
    assert p.group_spec("abc", "g1") == repo / ".dkod/sessions/abc/groups/g1/spec.json"
    assert p.group_writes("abc", "g1") == repo / ".dkod/sessions/abc/groups/g1/writes.jsonl"
    assert p.conflicts_dir("abc") == repo / ".dkod/sessions/abc/conflicts"


def test_session_rejects_absolute_path():
    p = Paths(Path("/tmp/r"))
    with pytest.raises(InvalidComponentError):
        p.session("/absolute")


@pytest.mark.parametrize("bad", ["..", "a/b", "../escape"])
def test_session_rejects_path_traversal(bad):
    p = Paths(Path("/tmp/r"))
    with pytest.raises(InvalidComponentError) as info:
        p.session(bad)
    assert info.value.component == bad


@pytest.mark.parametrize("bad", ["..", "a/b"])
def test_group_rejects_bad_gid_even_with_valid_sid(bad):
    p = Paths(Path("/tmp/r"))
    with pytest.raises(InvalidComponentError):
        p.group("sess-ok", bad)


def test_session_rejects_empty_id():
    with pytest.raises(InvalidComponentError):
        Paths(Path("/tmp/r")).session("")


def test_session_rejects_cur_dir_id():
    with pytest.raises(InvalidComponentError):
        Paths(Path("/tmp/r")).session(".")


def test_session_rejects_slash_separated():
    with pytest.raises(InvalidComponentError):
        Paths(Path("/tmp/r")).session("a/b")


def test_trailing_slash_is_single_component():
    assert validate_id("foo/") == "foo/"
    assert Paths(Path("/tmp/r")).session("foo/") == Path("/tmp/r/.dkod/sessions/foo")


def test_valid_ids_still_work():
    p = Paths(Path("/tmp/r"))
    assert p.session("sess-abc") == Path("/tmp/r/.dkod/sessions/sess-abc")
    assert p.group("sess-abc", "g1") == Path("/tmp/r/.dkod/sessions/sess-abc/groups/g1")