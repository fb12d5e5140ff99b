"""
Configuration loader — reads layerkit.yml into a LayerkitConfig.

It reads YAML, validates against the Pydantic schema, and returns a
typed config whose ``project_root`` is the directory holding the file.
Without a config file the defaults apply, rooted at the working
directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from layerkit.core.errors import ConfigError
from layerkit.core.models.config import LayerkitConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "layerkit.yml"

__all__ = ["CONFIG_FILE", "ConfigError", "find_config_file", "load_config", "project_root"]


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for layerkit.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to layerkit.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> LayerkitConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to layerkit.yml. If None, searches upward.

    Returns:
        Validated LayerkitConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found — using defaults rooted at %s", CONFIG_FILE, Path.cwd())
        return LayerkitConfig(project_root=Path.cwd().resolve())

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading %s config from %s", "explicit" if explicit else "discovered", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "layerkit" key or be flat
    if isinstance(data.get("layerkit"), dict):
        data = data["layerkit"]

    data = {k: v for k, v in data.items() if k != "project_root"}
    data["project_root"] = project_root(path)

    try:
        config = LayerkitConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded config: root namespace %s, source root %s",
        config.root_namespace,
        config.source_dir,
    )
    return config


def project_root(config_path: Path) -> Path:
    """Get the project root directory from a config file path."""
    return config_path.parent.resolve()
