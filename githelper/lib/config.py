"""
Helper settings.

Loads settings.yaml from the per-user helper directory. If no settings file
exists, returns defaults matching the built-in behavior.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from githelper.git.runner import DEFAULT_TIMEOUT, PUSH_TIMEOUT
from githelper.lib.constants import SETTINGS_FILENAME, get_helper_home

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Settings from settings.yaml."""
    commit_prefix: str = "Auto commit"
    commit_marker: str = "[GitOK]"  # Tags commits made by the helper
    git_timeout: int = DEFAULT_TIMEOUT
    push_timeout: int = PUSH_TIMEOUT


def load_settings(helper_dir: Optional[Path] = None) -> Settings:
    """Load settings.yaml and return Settings.

    If helper_dir is None the per-user helper directory is used. A missing
    or unparsable file yields defaults; unknown keys are ignored.
    """
    if helper_dir is None:
        helper_dir = get_helper_home()

    config_path = helper_dir / SETTINGS_FILENAME
    if not config_path.exists():
        return Settings()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
    except (yaml.YAMLError, OSError, ValueError) as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return Settings()

    defaults = Settings()
    values = {}
    for f in fields(Settings):
        if f.name not in data:
            continue
        expected = type(getattr(defaults, f.name))
        value = data[f.name]
        if isinstance(value, expected) and not isinstance(value, bool):
            values[f.name] = value
        else:
            logger.warning(
                f"Ignoring setting '{f.name}' in {config_path}: "
                f"expected {expected.__name__}, got {type(value).__name__}"
            )

    unknown = sorted(set(data) - {f.name for f in fields(Settings)})
    if unknown:
        logger.warning(f"Unknown settings in {config_path}: {unknown}")

    return Settings(**values)
