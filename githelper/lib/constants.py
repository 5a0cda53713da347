"""Shared constants for the git helper."""

import os
from pathlib import Path

# Per-user helper directory (cache file, settings.yaml)
HELPER_HOME_ENV = "GIT_HELPER_HOME"
DEFAULT_HELPER_HOME = Path.home() / ".coffic" / "git-helper"

CACHE_FILENAME = "workspace.json"
SETTINGS_FILENAME = "settings.yaml"

# Reserved cache key holding the last active application id
CURRENT_APP_KEY = "_current_app_"

# Action ids exposed to the plugin host
ACTION_GIT_STATUS = "git_status"
ACTION_GIT_COMMIT_PUSH = "git_commit_push"

# CLI exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2


def get_helper_home() -> Path:
    """Return the per-user helper directory, honoring GIT_HELPER_HOME."""
    override = os.environ.get(HELPER_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_HELPER_HOME
