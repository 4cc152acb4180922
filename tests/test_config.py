import tomllib

import pytest

from dkswarm.config import Config
from dkswarm.errors import ConfigDecodeError, StorageError
from dkswarm.paths import Paths


def test_config_roundtrips_through_disk(tmp_path):
    paths = Paths(tmp_path)
    paths.root().mkdir(parents=True)
    cfg = Config(main_branch="main", verify_cmd="cargo check && cargo test --workspace")
    cfg.save(paths.config())

    loaded = Config.load(paths.config())
    assert loaded.main_branch == "main"
    assert loaded.verify_cmd == "cargo check && cargo test --workspace"


def test_config_defaults_when_verify_absent(tmp_path):
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text('main_branch = "trunk"\n')
    loaded = Config.load(cfg_path)
    assert loaded.main_branch == "trunk"
    assert loaded.verify_cmd is None


def test_save_omits_absent_verify_cmd(tmp_path):
    cfg_path = tmp_path / "config.toml"
    Config(main_branch="trunk").save(cfg_path)
    assert tomllib.loads(cfg_path.read_text()) == {"main_branch": "trunk"}


def test_save_creates_parent_dirs(tmp_path):
    cfg_path = tmp_path / "a" / "b" / "config.toml"
    Config(main_branch="dev").save(cfg_path)
    assert Config.load(cfg_path).main_branch == "dev"


def test_load_missing_file_raises_storage_error(tmp_path):
    missing = tmp_path / "config.toml"
    with pytest.raises(StorageError) as info:
        Config.load(missing)
    assert info.value.path == missing


def test_load_malformed_toml_raises_decode_error(tmp_path):
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text("main_branch = \n")
    with pytest.raises(ConfigDecodeError) as info:
        Config.load(cfg_path)
    assert info.value.path == cfg_path


def test_load_without_main_branch_raises_decode_error(tmp_path):
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text('verify_cmd = "make"\n')
    with pytest.raises(ConfigDecodeError):
        Config.load(cfg_path)