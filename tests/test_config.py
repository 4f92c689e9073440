"""Tests for configuration loading."""

import pytest
from pathlib import Path

from yacsend.config import load_config

_ENV_KEYS = ["YACSEND_STATE_DIR", "YACSEND_LOG_LEVEL"]


class TestConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        config = load_config(tmp_path / "absent.toml")
        assert config.state_dir == Path.home() / ".httpyac"
        assert config.recent_file == Path.home() / ".httpyac" / "recent.json"
        assert config.log_level == "WARNING"
        assert config.prompt.message == "please choose which region to use"
        assert config.send.extensions == [".http", ".rest"]

    def test_env_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("YACSEND_STATE_DIR", str(tmp_path / "state"))
        monkeypatch.setenv("YACSEND_LOG_LEVEL", "DEBUG")

        config = load_config()
        assert config.recent_file == tmp_path / "state" / "recent.json"
        assert config.log_level == "DEBUG"

    def test_toml_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        toml_path = tmp_path / "yacsend.toml"
        toml_path.write_text(f"""
state_dir = "{(tmp_path / 'cache').as_posix()}"
log_level = "INFO"

[prompt]
message = "which one?"

[send]
extensions = [".http"]
""")
        config = load_config(toml_path)
        assert config.state_dir == tmp_path / "cache"
        assert config.log_level == "INFO"
        assert config.prompt.message == "which one?"
        assert config.send.extensions == [".http"]

    def test_toml_in_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("YACSEND_LOG_LEVEL", raising=False)
        (tmp_path / "yacsend.toml").write_text('log_level = "ERROR"\n')

        assert load_config().log_level == "ERROR"

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("YACSEND_STATE_DIR", str(tmp_path / "env"))

        toml_path = tmp_path / "yacsend.toml"
        toml_path.write_text(f'state_dir = "{(tmp_path / "file").as_posix()}"\n')
        config = load_config(toml_path)
        assert config.state_dir == tmp_path / "env"  # env wins
