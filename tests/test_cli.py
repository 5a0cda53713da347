"""Tests for githelper.cli module."""

import json
from unittest.mock import patch

from conftest import git
from githelper.cli import main
from githelper.lib.types import WorkspaceReference


class TestStatusCommand:

    def test_clean_repo(self, repo, tmp_path, capsys):
        assert main(["--home", str(tmp_path / "h"), "status", str(repo)]) == 0
        out = capsys.readouterr().out
        assert "Branch:         main" in out
        assert "Changed files:  0" in out
        assert "Unpushed:       no" in out

    def test_not_a_repository(self, tmp_path, capsys):
        assert main(["--home", str(tmp_path / "h"), "status", str(tmp_path)]) == 1
        assert "not a Git repository" in capsys.readouterr().out


class TestSyncCommand:

    def test_commits(self, repo, tmp_path, capsys):
        (repo / "new.txt").write_text("x\n")
        assert main(["--home", str(tmp_path / "h"), "sync", str(repo)]) == 0
        assert "not pushed" in capsys.readouterr().out
        assert git(repo, "status", "--porcelain") == ""

    def test_nothing_to_commit_exits_nonzero(self, repo, tmp_path, capsys):
        assert main(["--home", str(tmp_path / "h"), "sync", str(repo)]) == 1
        assert "No changes to commit" in capsys.readouterr().out


class TestWorkspaceCommand:

    def test_unsupported_app(self, tmp_path, capsys):
        assert main(["--home", str(tmp_path), "workspace", "--app", "Safari"]) == 2
        assert "Unsupported application" in capsys.readouterr().out

    @patch("githelper.workspace.vscode.VSCodeLocator.locate")
    def test_prints_path(self, mock_locate, tmp_path, capsys):
        mock_locate.return_value = WorkspaceReference(path="/home/me/proj")
        assert main(["--home", str(tmp_path), "workspace", "--app", "Code"]) == 0
        assert capsys.readouterr().out.strip() == "/home/me/proj"


class TestActionCommands:

    @patch("githelper.workspace.vscode.VSCodeLocator.locate")
    def test_actions_then_run(self, mock_locate, repo, tmp_path, capsys):
        mock_locate.return_value = WorkspaceReference(path=str(repo))
        home = str(tmp_path / "h")

        assert main(["--home", home, "actions", "--app", "Code"]) == 0
        actions = json.loads(capsys.readouterr().out)
        assert [a["id"] for a in actions] == ["git_status"]
        assert actions[0]["icon"] == "📊"

        assert main(["--home", home, "run", "git_status"]) == 0
        assert capsys.readouterr().out.startswith("Branch: main")
