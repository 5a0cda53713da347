"""
IDE workspace locators.

Each supported IDE keeps its window state in a handful of storage files
whose location and format vary by platform and release. A locator lists the
candidate files for its IDE (most specific first) and extracts the folder of
the last active window from the first candidate that yields one.

Storage formats:
- *.json: plain JSON state, searched by a per-IDE list of field paths.
- *.vscdb: SQLite key-value store (ItemTable), searched by key pattern.
"""

import json
import logging
import os
import sqlite3
import sys
from abc import ABC, abstractmethod
from contextlib import closing
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from githelper.lib.paths import normalize
from githelper.lib.types import WorkspaceReference

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Field path into a JSON document; ints index lists
FieldPath = tuple[Any, ...]

# ItemTable rows whose key contains any of these are scanned
STORE_KEY_PATTERNS = ("workspace", "window", "folder")

# Where a folder URI may sit inside an ItemTable value
STORE_VALUE_FIELDS: tuple[FieldPath, ...] = (
    ("folderUri",),
    ("workspace", "folders", 0, "uri"),
    ("entries", 0, "folderUri"),
)


def first_success(
    items: Iterable[T],
    attempt: Callable[[T], Optional[R]],
    what: str = "candidate",
) -> Optional[R]:
    """Return the first truthy attempt(item), skipping items that raise.

    Items are consumed lazily and scanning stops at the first success.
    """
    for item in items:
        try:
            result = attempt(item)
        except Exception as e:
            logger.debug(f"Skipping {what} {item!r}: {e}")
            continue
        if result:
            return result
    return None


def dig(data: Any, path: FieldPath) -> Any:
    """Follow a field path through nested dicts/lists, None if any step is missing."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(data, list) or len(data) <= step:
                return None
        elif not isinstance(data, dict) or step not in data:
            return None
        data = data[step]
    return data


def first_field(data: Any, paths: Iterable[FieldPath]) -> Optional[str]:
    """Return the first non-empty string found at one of the field paths."""
    for path in paths:
        value = dig(data, path)
        if isinstance(value, str) and value:
            return value
    return None


class WorkspaceLocator(ABC):
    """Finds the workspace folder open in one IDE."""

    #: Human-readable IDE name for logs
    name: str = ""

    #: Field paths tried, in order, against *.json storage files
    json_fields: tuple[FieldPath, ...] = ()

    def __init__(
        self,
        home: Optional[Path] = None,
        platform: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.home = home if home is not None else Path.home()
        self.platform = platform if platform is not None else sys.platform
        self.environ = environ if environ is not None else os.environ

    @abstractmethod
    def app_dirs(self) -> list[Path]:
        """IDE data directories for this platform, most specific first."""

    @abstractmethod
    def storage_files(self) -> list[str]:
        """Storage file names relative to an app dir, in priority order."""

    def config_root(self) -> Optional[Path]:
        """Platform directory that holds per-application data."""
        if self.platform == "darwin":
            return self.home / "Library" / "Application Support"
        if self.platform == "win32":
            app_data = self.environ.get("APPDATA")
            return Path(app_data) if app_data else None
        xdg = self.environ.get("XDG_CONFIG_HOME")
        return Path(xdg) if xdg else self.home / ".config"

    def candidate_paths(self) -> list[Path]:
        """All candidate storage files, in priority order."""
        return [d / name for d in self.app_dirs() for name in self.storage_files()]

    def locate(self) -> Optional[WorkspaceReference]:
        """Resolve the active workspace, or None when no candidate yields one."""
        existing = (p for p in self.candidate_paths() if p.is_file())
        workspace = first_success(existing, self._read_candidate, what=f"{self.name} storage file")
        if not workspace:
            logger.warning(f"No {self.name} workspace found")
            return None

        path = normalize(workspace)
        logger.info(f"Found {self.name} workspace: {path}")
        return WorkspaceReference(path=path)

    def _read_candidate(self, path: Path) -> Optional[str]:
        logger.debug(f"Reading {self.name} storage file: {path}")
        if path.suffix == ".vscdb":
            found = self.parse_store(path)
        else:
            found = self.parse_json(path)
        if not found:
            logger.debug(f"No workspace folder in {path}")
        return found

    def parse_json(self, path: Path) -> Optional[str]:
        """Extract a folder URI from a plain JSON storage file."""
        data = json.loads(path.read_text(encoding="utf-8"))
        return first_field(data, self.json_fields)

    def parse_store(self, path: Path) -> Optional[str]:
        """Extract a folder URI from a SQLite state store.

        The database is opened read-only for the duration of this call.
        """
        where = " OR ".join("key LIKE ?" for _ in STORE_KEY_PATTERNS)
        query = f"SELECT key, value FROM ItemTable WHERE {where} ORDER BY key DESC"
        params = [f"%{p}%" for p in STORE_KEY_PATTERNS]

        uri = f"{path.resolve().as_uri()}?mode=ro"
        with closing(sqlite3.connect(uri, uri=True)) as conn:
            rows = conn.execute(query, params).fetchall()

        return first_success(rows, _folder_from_row, what="state row")


def _folder_from_row(row: tuple) -> Optional[str]:
    key, value = row
    if not value:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    return first_field(json.loads(value), STORE_VALUE_FIELDS)
