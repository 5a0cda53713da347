"""Workspace resolution: IDE locators and the on-disk workspace cache."""

from typing import Optional

from githelper.workspace.cache import WorkspaceCache
from githelper.workspace.cursor import CursorLocator
from githelper.workspace.locator import WorkspaceLocator, first_success
from githelper.workspace.vscode import VSCodeLocator


def select_locator(app_id: str) -> Optional[WorkspaceLocator]:
    """Pick the locator for an overlaid application id, or None if unsupported.

    Matching is a case-insensitive substring test; "cursor" wins over "code".
    """
    lower_app = (app_id or "").lower()
    if "cursor" in lower_app:
        return CursorLocator()
    if "code" in lower_app:
        return VSCodeLocator()
    return None

__all__ = [
    "WorkspaceCache",
    "WorkspaceLocator",
    "VSCodeLocator",
    "CursorLocator",
    "first_success",
    "select_locator",
]
