"""Configuration loading from environment variables and yacsend.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_STATE_DIR = Path.home() / ".httpyac"
_CONFIG_FILENAME = "yacsend.toml"
_RECENT_FILENAME = "recent.json"


@dataclass
class PromptConfig:
    """Interactive region prompt configuration."""

    message: str = "please choose which region to use"


@dataclass
class SendConfig:
    """Request file discovery configuration."""

    extensions: list[str] = field(default_factory=lambda: [".http", ".rest"])


@dataclass
class YacsendConfig:
    """Top-level yacsend configuration."""

    prompt: PromptConfig = field(default_factory=PromptConfig)
    send: SendConfig = field(default_factory=SendConfig)
    state_dir: Path = _DEFAULT_STATE_DIR
    log_level: str = "WARNING"

    @property
    def recent_file(self) -> Path:
        return self.state_dir / _RECENT_FILENAME


def load_config(config_path: Path | None = None) -> YacsendConfig:
    """Load configuration from environment variables and optional yacsend.toml.

    Priority: environment variables > yacsend.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.httpyac/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_STATE_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    prompt_data = file_data.get("prompt", {})
    send_data = file_data.get("send", {})

    config = YacsendConfig(
        prompt=PromptConfig(
            message=prompt_data.get("message", "please choose which region to use"),
        ),
        send=SendConfig(
            extensions=list(send_data.get("extensions", [".http", ".rest"])),
        ),
        state_dir=Path(
            os.getenv("YACSEND_STATE_DIR", file_data.get("state_dir", str(_DEFAULT_STATE_DIR)))
        ).expanduser(),
        log_level=os.getenv("YACSEND_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
    return config
