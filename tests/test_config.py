"""Tests for configuration loading."""

import pytest
from pathlib import Path

from alwaysmemo.config import load_config

_ENV_KEYS = ["MEMO_DATA_DIR", "MEMO_HOST", "MEMO_PORT", "MEMO_LOG_LEVEL"]


class TestConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        config = load_config(tmp_path / "missing.toml")
        assert config.data_dir.name == ".always-memo"
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8765
        assert config.log_level == "INFO"

    def test_env_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MEMO_DATA_DIR", str(tmp_path / "notes"))
        monkeypatch.setenv("MEMO_PORT", "9100")

        config = load_config(tmp_path / "missing.toml")
        assert config.data_dir == tmp_path / "notes"
        assert config.server.port == 9100

    def test_toml_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        toml_path = tmp_path / "memo.toml"
        toml_path.write_text(f"""
data_dir = "{tmp_path.as_posix()}/store"
log_level = "DEBUG"

[server]
host = "0.0.0.0"
port = 8080
""")
        config = load_config(toml_path)
        assert config.data_dir == tmp_path / "store"
        assert config.log_level == "DEBUG"
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8080

    def test_toml_discovered_in_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        (tmp_path / "memo.toml").write_text("[server]\nport = 9999\n")
        config = load_config()
        assert config.server.port == 9999

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MEMO_HOST", "localhost")

        toml_path = tmp_path / "memo.toml"
        toml_path.write_text("""
[server]
host = "0.0.0.0"
""")
        config = load_config(toml_path)
        assert config.server.host == "localhost"  # env wins
