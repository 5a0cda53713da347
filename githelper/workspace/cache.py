"""
Workspace cache.

Persists the workspace resolved for each IDE application so a later,
decoupled action execution (which cannot query the IDE) can recover it.

File layout (workspace.json in the helper directory):

    {
      "_current_app_": "Code",
      "Code": "/home/me/project",
      "Cursor": null
    }

Every call does a full read-modify-write of the file; nothing is held in
memory between calls. Concurrent writers race with last-write-wins.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from githelper.lib.constants import CACHE_FILENAME, CURRENT_APP_KEY, get_helper_home
from githelper.lib.paths import normalize
from githelper.lib.validate import ValidationError, validate, validate_file

logger = logging.getLogger(__name__)

SCHEMA_NAME = "workspace_cache"


class WorkspaceCache:
    """JSON-file store mapping application ids to workspace paths."""

    def __init__(self, cache_dir: Optional[Path] = None):
        self.cache_dir = cache_dir if cache_dir is not None else get_helper_home()
        self.cache_file = self.cache_dir / CACHE_FILENAME

    def _read(self) -> dict:
        """Read the cache document; a missing or invalid file reads as empty."""
        if not self.cache_file.exists():
            logger.debug(f"Cache file does not exist: {self.cache_file}")
            return {}
        try:
            return validate_file(self.cache_file, SCHEMA_NAME)
        except (ValidationError, OSError) as e:
            logger.error(f"Failed to read workspace cache, it will be rewritten: {e}")
            return {}

    def _write(self, data: dict) -> None:
        # Never put a document on disk that _read would discard
        validate(data, SCHEMA_NAME)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = self.cache_file.with_name(self.cache_file.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.cache_file)

    def _update(self, key: str, value: Optional[str]) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def save_current_app(self, app_id: str) -> None:
        """Record app_id as the last active application."""
        try:
            self._update(CURRENT_APP_KEY, app_id)
            logger.debug(f"Cached current application: {app_id}")
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to cache current application: {e}")

    def save_workspace(self, app_id: str, workspace: Optional[str]) -> None:
        """Record the workspace resolved for app_id.

        None is stored as JSON null and means "resolution attempted, found
        nothing".
        """
        clean = normalize(workspace) if workspace else None
        try:
            self._update(app_id, clean)
            logger.debug(f"Cached workspace: {app_id} => {clean}")
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to cache workspace for {app_id}: {e}")

    def get_current_app(self) -> str:
        """Return the last active application id, or '' if unset."""
        return self._read().get(CURRENT_APP_KEY) or ""

    def has_entry(self, app_id: str) -> bool:
        """True if resolution was ever recorded for app_id, even as null."""
        return app_id != CURRENT_APP_KEY and app_id in self._read()

    def get_workspace(self, app_id: Optional[str] = None) -> Optional[str]:
        """Return the cached workspace for app_id (default: current app).

        A cached path that no longer exists on disk reads as None.
        """
        data = self._read()
        actual_app_id = app_id or data.get(CURRENT_APP_KEY) or ""
        if not actual_app_id:
            logger.warning("No application id given and no current application cached")
            return None

        workspace = data.get(actual_app_id)
        if not workspace:
            return None

        if not Path(workspace).exists():
            logger.warning(f"Cached workspace path no longer exists: {workspace}")
            return None

        return workspace
