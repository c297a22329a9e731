"""
Configuration loader — builds a ListerConfig from file and environment.

Sources, lowest to highest precedence:

    built-in defaults  <  YAML file  <  FLAKE_DIR env var

The YAML file is optional.  It is taken from the explicit path, then
``NIX_LIST_CONFIG``, then ``~/.config/nix-list.yml`` if that exists.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from nixlist.core.errors import ConfigError
from nixlist.core.models.config import ListerConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NIX_LIST_CONFIG"
FLAKE_DIR_ENV_VAR = "FLAKE_DIR"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "nix-list.yml"


def find_config_file(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Pick the config file to read, or None when there is none.

    An explicit path (argument or env var) is returned even if it does
    not exist, so the loader can report it.
    """
    env = os.environ if environ is None else environ
    if path is not None:
        return path
    if env.get(CONFIG_ENV_VAR):
        return Path(env[CONFIG_ENV_VAR]).expanduser()
    if DEFAULT_CONFIG_FILE.is_file():
        return DEFAULT_CONFIG_FILE
    return None


def _read_yaml(path: Path) -> dict:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ListerConfig:
    """Load and validate the tool configuration.

    Args:
        path: Explicit config file. If None, the file is searched for.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        Validated ListerConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    env = os.environ if environ is None else environ
    data: dict = {}

    config_file = find_config_file(path, env)
    if config_file is not None:
        logger.debug("Loading config from %s", config_file)
        data = _read_yaml(config_file)

    if env.get(FLAKE_DIR_ENV_VAR):
        data["flake_dir"] = env[FLAKE_DIR_ENV_VAR]

    try:
        config = ListerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Using flake directory %s", config.flake_dir)
    return config
