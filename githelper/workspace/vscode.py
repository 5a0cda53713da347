"""VS Code workspace locator."""

from pathlib import Path

from githelper.workspace.locator import WorkspaceLocator


class VSCodeLocator(WorkspaceLocator):
    """Reads the last opened folder from VS Code's global storage."""

    name = "VS Code"

    # Insiders keeps its state apart from the stable build
    builds = ("Code - Insiders", "Code")

    json_fields = (
        ("openedPathsList", "entries", 0, "folderUri"),
        ("windowState", "lastActiveWindow", "folderUri"),
        ("windowsState", "lastActiveWindow", "folder"),
    )

    def app_dirs(self) -> list[Path]:
        root = self.config_root()
        if root is None:
            return []
        return [root / build for build in self.builds]

    def storage_files(self) -> list[str]:
        return [
            "storage.json",
            "User/globalStorage/state.vscdb",
            "User/globalStorage/storage.json",
        ]
