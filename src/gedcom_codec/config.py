import os
from pathlib import Path

import yaml

from gedcom_codec.utils.pathing import resolve_project_path

CONFIG_PATH = resolve_project_path(Path("config") / "gedcom_codec.yml")
CONFIG_ENV_VAR = "GEDCOM_CODEC_CONFIG"


class CodecConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.generator = data.get("generator", {}) or {}
        self.debug = data.get("debug", False)


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> "CodecConfig":
    path = path or config_path()
    if not path.exists():
        # Installed copies ship without the repo-level config directory.
        return CodecConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return CodecConfig(data)


_config_cache = None


def get_config() -> "CodecConfig":
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the file."""
    global _config_cache
    _config_cache = None
