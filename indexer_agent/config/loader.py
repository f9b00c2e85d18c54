"""Layered TOML configuration for migration runs.

A run reads up to two files from the config directory, each optional:
``default.toml`` and ``{INDEXER_ENV}.toml``. Later files are deep-merged
over earlier ones. When no config directory is found the result is empty
and settings come from model defaults and INDEXER_* variables.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "INDEXER_CONFIG_DIR"
ENVIRONMENT_ENV = "INDEXER_ENV"
DEFAULT_ENVIRONMENT = "development"
SEARCH_DEPTH = 5


def find_config_dir(start: Path | None = None) -> Path | None:
    """Locate the configuration directory.

    INDEXER_CONFIG_DIR wins and must exist. Otherwise the nearest
    ``config/`` directory holding a ``default.toml``, searching from
    ``start`` (the working directory) upwards, is used.

    Raises:
        FileNotFoundError: If INDEXER_CONFIG_DIR names a missing directory
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents][:SEARCH_DEPTH]:
        if (candidate / "config" / "default.toml").is_file():
            return candidate / "config"
    return None


def get_environment() -> str:
    """Name of the environment overlay, from INDEXER_ENV."""
    return os.environ.get(ENVIRONMENT_ENV) or DEFAULT_ENVIRONMENT


def config_files(config_dir: Path, environment: str) -> list[Path]:
    """Existing config files in merge order."""
    names = ["default.toml"]
    if environment != "default":
        names.append(f"{environment}.toml")
    return [config_dir / name for name in names if (config_dir / name).is_file()]


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; tables merge, scalars replace."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Load and merge the configuration files for this run.

    Args:
        config_dir: Directory to read, found with find_config_dir when omitted
        environment: Overlay name, read from INDEXER_ENV when omitted

    Returns:
        Merged configuration, empty when no files exist
    """
    config_dir = config_dir or find_config_dir()
    if config_dir is None:
        return {}

    config: dict[str, Any] = {}
    for path in config_files(config_dir, environment or get_environment()):
        config = deep_merge(config, load_toml(path))
    return config
