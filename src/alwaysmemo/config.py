"""Configuration loading from environment variables and memo.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_DATA_DIR = Path.home() / ".always-memo"
_CONFIG_FILENAME = "memo.toml"


@dataclass
class ServerConfig:
    """Image retrieval HTTP surface."""

    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class MemoConfig:
    """Top-level Always Memo configuration."""

    data_dir: Path = _DEFAULT_DATA_DIR
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> MemoConfig:
    """Load configuration from environment variables and optional memo.toml.

    Priority: environment variables > memo.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and the default data dir
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_DATA_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    server_data = file_data.get("server", {})
    data_dir = os.getenv("MEMO_DATA_DIR", file_data.get("data_dir"))

    return MemoConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        server=ServerConfig(
            host=os.getenv("MEMO_HOST", server_data.get("host", "127.0.0.1")),
            port=int(os.getenv("MEMO_PORT", server_data.get("port", 8765))),
        ),
        log_level=os.getenv("MEMO_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
