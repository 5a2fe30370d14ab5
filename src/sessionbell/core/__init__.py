"""
Core configuration for SessionBell.

Provides:
- Path constants (SESSIONBELL_HOME, SESSIONBELL_CONFIG_FILE)
- Config loading/saving for the frozen NotifierConfig
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from sessionbell.notifications.config import NotifierConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

SESSIONBELL_HOME: Path = Path(os.environ.get("SESSIONBELL_HOME", Path.home() / ".sessionbell"))
SESSIONBELL_CONFIG_FILE: Path = SESSIONBELL_HOME / "config.yaml"


# ---------------------------------------------------------------------------
# Config loading/saving
# ---------------------------------------------------------------------------


def load_config(path: Path | None = None) -> NotifierConfig:
    """Load configuration from YAML, or return defaults.

    A missing, unreadable or invalid file yields the defaults; the problem
    is logged rather than raised.
    """
    path = path or SESSIONBELL_CONFIG_FILE
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
            return NotifierConfig.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError, ValueError):
            logger.warning("Ignoring invalid config at %s", path, exc_info=True)
    return NotifierConfig()


def save_config(config: NotifierConfig, path: Path | None = None) -> Path:
    """Save configuration to YAML and return the path written."""
    path = path or SESSIONBELL_CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.model_dump(mode="json"), default_flow_style=False))
    return path


__all__ = [
    "SESSIONBELL_HOME",
    "SESSIONBELL_CONFIG_FILE",
    "NotifierConfig",
    "load_config",
    "save_config",
]
