"""Configuration via a YAML file and environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .flags import DEFAULT_SEPARATOR, validate_separator

CONFIG_DIR = Path.home() / ".config" / "mdir"
CONFIG_FILE = "config.yaml"

CONFIG_ENV = "MDIR_CONFIG"
MAILDIR_ENV = "MAILDIR"
SEPARATOR_ENV = "MDIR_SEPARATOR"


@dataclass
class MdirConfig:
    """mdir configuration."""
    maildir: Path | None = None
    separator: str = DEFAULT_SEPARATOR


def get_config_path() -> Path:
    """Get path to config.yaml (``$MDIR_CONFIG`` overrides the default)."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_DIR / CONFIG_FILE


def load_config(path: Path | None = None, env: bool = True) -> MdirConfig:
    """Load config from config.yaml, then apply environment overrides."""
    config_path = path or get_config_path()
    data = {}
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    maildir = data.get("maildir")
    separator = str(data.get("separator", DEFAULT_SEPARATOR))
    if env:
        maildir = os.environ.get(MAILDIR_ENV) or maildir
        separator = os.environ.get(SEPARATOR_ENV) or separator

    return MdirConfig(
        maildir=Path(maildir).expanduser() if maildir else None,
        separator=validate_separator(separator),
    )


def save_config(config: MdirConfig, path: Path | None = None) -> Path:
    """Save config to config.yaml. Returns the path written."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {}
    if config.maildir:
        data["maildir"] = str(config.maildir)
    data["separator"] = validate_separator(config.separator)

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    return config_path
