"""Cursor workspace locator."""

from pathlib import Path

from githelper.workspace.locator import WorkspaceLocator


class CursorLocator(WorkspaceLocator):
    name = "Cursor"

    json_fields = (
        ("openedPathsList", "entries", 0, "folderUri"),
        ("windowsState", "lastActiveWindow", "folder"),
    )

    def app_dirs(self) -> list[Path]:
        root = self.config_root()
        return [root / "Cursor"] if root is not None else []

    def storage_files(self) -> list[str]:
        return [
            "storage.json",
            "User/globalStorage/storage.json",
            "User/globalStorage/state.vscdb",
        ]
