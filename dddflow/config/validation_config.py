"""Validation configuration.

Settings live in validation.yaml next to this module. Environment variables
take precedence over YAML config.

Usage:
    from dddflow.config.validation_config import get_specs_dir, is_strict_mode

    specs_dir = project_root / get_specs_dir()
    if is_strict_mode():
        # Fail on warnings too
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).parent / "validation.yaml"
_cached_config: Optional[Dict[str, Any]] = None

_TRUTHY = {"1", "true", "yes", "on"}


def _default_config() -> Dict[str, Any]:
    """Return default configuration if validation.yaml doesn't exist."""
    return {
        "version": "1.0",
        "project": {
            "project_file": "ddd-project.json",
            "specs_dir": "specs",
        },
        "cli": {
            "strict": False,
            "log_level": "WARNING",
        },
    }


def _load_config() -> Dict[str, Any]:
    """Load validation.yaml configuration, with caching."""
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            _cached_config = yaml.safe_load(f) or {}
    else:
        logger.debug("No %s found, using default configuration", _CONFIG_PATH.name)
        _cached_config = _default_config()

    return _cached_config


def reset_config_cache() -> None:
    """Reset cached config (for testing)."""
    global _cached_config
    _cached_config = None


def _section(name: str) -> Dict[str, Any]:
    section = _load_config().get(name) or {}
    return section if isinstance(section, dict) else {}


def get_project_file() -> str:
    """Project manifest file name.

    Precedence: DDDFLOW_PROJECT_FILE, config file, "ddd-project.json".
    """
    env_value = os.environ.get("DDDFLOW_PROJECT_FILE")
    if env_value:
        return env_value
    return _section("project").get("project_file") or "ddd-project.json"


def get_specs_dir() -> str:
    """Specs directory relative to the project root.

    Precedence: DDDFLOW_SPECS_DIR, config file, "specs".
    """
    env_value = os.environ.get("DDDFLOW_SPECS_DIR")
    if env_value:
        return env_value
    return _section("project").get("specs_dir") or "specs"


def is_strict_mode() -> bool:
    """Whether warnings should fail a CLI run.

    Precedence: DDDFLOW_STRICT, config file, False.
    """
    env_value = os.environ.get("DDDFLOW_STRICT")
    if env_value is not None:
        return env_value.strip().lower() in _TRUTHY
    return bool(_section("cli").get("strict", False))


def get_log_level() -> str:
    """Log level name for the CLI.

    Precedence: DDDFLOW_LOG_LEVEL, config file, "WARNING".
    """
    env_value = os.environ.get("DDDFLOW_LOG_LEVEL")
    if env_value:
        return env_value.upper()
    return str(_section("cli").get("log_level") or "WARNING").upper()
