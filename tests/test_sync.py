"""Tests for githelper.sync module against real repositories."""

from unittest.mock import patch

from conftest import commit_count, git
from githelper.git.runner import GitResult
from githelper.git.status import WorkingTreeStatus
from githelper.lib.config import Settings
from githelper.lib.types import GitStatusSummary
from githelper.sync import GitSyncEngine, describe_changes


class TestIsRepository:

    def test_plain_directory(self, tmp_path):
        assert GitSyncEngine(str(tmp_path)).is_repository() is False

    def test_fresh_repo(self, empty_repo):
        assert GitSyncEngine(str(empty_repo)).is_repository() is True

    def test_subdirectory_is_not_workspace_root(self, repo):
        sub = repo / "sub"
        sub.mkdir()
        # git would accept it, but there is no .git at the workspace root
        assert GitSyncEngine(str(sub)).is_repository() is False

    def test_accepts_file_uri(self, repo):
        assert GitSyncEngine(repo.as_uri()).is_repository() is True

    def test_empty_path(self):
        assert GitSyncEngine("").is_repository() is False

    def test_stray_git_directory(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert GitSyncEngine(str(tmp_path)).is_repository() is False

    @patch("githelper.git.status.run_git", side_effect=FileNotFoundError("git"))
    def test_missing_git_binary(self, _mock_run, repo, caplog):
        assert GitSyncEngine(str(repo)).is_repository() is False
        assert "Failed to probe git repository" in caplog.text


class TestGetStatus:

    def test_not_a_repository_is_zeroed(self, tmp_path):
        assert GitSyncEngine(str(tmp_path)).get_status() == GitStatusSummary()

    def test_fresh_repo(self, empty_repo):
        status = GitSyncEngine(str(empty_repo)).get_status()
        assert status.is_repository is True
        assert status.branch == "main"
        assert status.changed_file_count == 0
        assert status.has_uncommitted_changes is False
        assert status.has_unpushed_commits is False

    def test_counts_each_category_once(self, repo):
        (repo / "tracked.txt").write_text("a\n")
        (repo / "gone.txt").write_text("b\n")
        (repo / "old.txt").write_text("rename me\n")
        git(repo, "add", ".")
        git(repo, "commit", "-q", "-m", "more")

        (repo / "README.md").write_text("changed\n")             # modified, unstaged
        (repo / "tracked.txt").write_text("staged\n")
        git(repo, "add", "tracked.txt")                           # modified, staged
        (repo / "gone.txt").unlink()                              # deleted
        git(repo, "mv", "old.txt", "new.txt")                     # renamed
        (repo / "added.txt").write_text("x\n")
        git(repo, "add", "added.txt")                             # created
        (repo / "added.txt").write_text("x and more\n")           # still one path
        (repo / "untracked.txt").write_text("u\n")                # untracked

        engine = GitSyncEngine(str(repo))
        status = engine.get_status()
        assert status.changed_file_count == 6
        assert status.has_uncommitted_changes is True
        assert engine.get_changes_description() == (
            "Created: 1 file, Modified: 2 files, Deleted: 1 file, Renamed: 1 file, Untracked: 1 file"
        )

    def test_intent_to_add_rename_counted_once(self, repo):
        (repo / "original_name.txt").write_text("some content to rename\n")
        git(repo, "add", "original_name.txt")
        git(repo, "commit", "-q", "-m", "add file")
        (repo / "original_name.txt").rename(repo / "renamed_file.txt")
        git(repo, "add", "-N", "renamed_file.txt")

        engine = GitSyncEngine(str(repo))
        assert engine.get_status().changed_file_count == 1
        assert engine.get_changes_description() == "Renamed: 1 file"

    def test_untracked_files_in_new_directory_counted_individually(self, repo):
        (repo / "pkg").mkdir()
        (repo / "pkg" / "a.py").write_text("")
        (repo / "pkg" / "b.py").write_text("")
        assert GitSyncEngine(str(repo)).get_status().changed_file_count == 2

    @patch("githelper.sync.git.get_working_tree_status", return_value=None)
    def test_status_failure_is_zeroed(self, _mock_status, repo):
        assert GitSyncEngine(str(repo)).get_status() == GitStatusSummary()


class TestUnpushedCommits:

    def test_no_remote(self, repo):
        assert GitSyncEngine(str(repo)).get_status().has_unpushed_commits is False

    def test_remote_but_never_pushed(self, repo, bare_remote):
        git(repo, "remote", "add", "origin", str(bare_remote))
        assert GitSyncEngine(str(repo)).get_status().has_unpushed_commits is True

    def test_in_sync_after_push(self, repo, bare_remote):
        git(repo, "remote", "add", "origin", str(bare_remote))
        git(repo, "push", "-q", "origin", "main")
        assert GitSyncEngine(str(repo)).has_unpushed_commits() is False

    def test_ahead_of_remote(self, repo, bare_remote):
        git(repo, "remote", "add", "origin", str(bare_remote))
        git(repo, "push", "-q", "origin", "main")
        (repo / "more.txt").write_text("x\n")
        git(repo, "add", "more.txt")
        git(repo, "commit", "-q", "-m", "ahead")
        assert GitSyncEngine(str(repo)).has_unpushed_commits() is True

    def test_detached_head(self, repo, bare_remote):
        git(repo, "remote", "add", "origin", str(bare_remote))
        git(repo, "checkout", "-q", "--detach")
        status = GitSyncEngine(str(repo)).get_status()
        assert status.branch == ""
        assert status.has_unpushed_commits is False

    def test_uses_first_remote(self, repo, bare_remote, tmp_path):
        other = tmp_path / "other.git"
        git(tmp_path, "init", "-q", "--bare", str(other))
        git(repo, "remote", "add", "a-remote", str(bare_remote))
        git(repo, "remote", "add", "b-remote", str(other))
        git(repo, "push", "-q", "a-remote", "main")
        assert GitSyncEngine(str(repo)).has_unpushed_commits() is False

    def test_not_a_repository(self, tmp_path):
        assert GitSyncEngine(str(tmp_path)).has_unpushed_commits() is False


class TestChangesDescription:

    def test_empty_when_clean(self, repo):
        assert GitSyncEngine(str(repo)).get_changes_description() == ""

    def test_empty_when_not_a_repository(self, tmp_path):
        assert GitSyncEngine(str(tmp_path)).get_changes_description() == ""

    def test_omits_empty_categories(self):
        status = WorkingTreeStatus(modified=["a", "b"], untracked=["c"])
        assert describe_changes(status) == "Modified: 2 files, Untracked: 1 file"


class TestCommitAndPush:

    def test_not_a_repository(self, tmp_path):
        result = GitSyncEngine(str(tmp_path)).commit_and_push()
        assert result.succeeded is False
        assert "not a Git repository" in result.message

    def test_not_initialized(self):
        result = GitSyncEngine("").commit_and_push()
        assert result.succeeded is False
        assert "not initialized" in result.message

    def test_nothing_to_commit(self, repo):
        before = commit_count(repo)
        result = GitSyncEngine(str(repo)).commit_and_push()
        assert result.succeeded is False
        assert result.message == "No changes to commit"
        assert commit_count(repo) == before

    def test_commits_without_remote(self, repo):
        (repo / "new.txt").write_text("x\n")
        before = commit_count(repo)

        result = GitSyncEngine(str(repo)).commit_and_push()

        assert result.succeeded is True
        assert "not pushed" in result.message
        assert commit_count(repo) == before + 1
        assert git(repo, "status", "--porcelain") == ""

    def test_commit_message_has_marker(self, repo):
        (repo / "new.txt").write_text("x\n")
        GitSyncEngine(str(repo)).commit_and_push()
        assert git(repo, "log", "-1", "--format=%s") == "Auto commit: Untracked: 1 file [GitOK]"

    def test_custom_prefix_and_marker(self, repo):
        (repo / "README.md").write_text("edit\n")
        settings = Settings(commit_prefix="WIP", commit_marker="[bot]")
        GitSyncEngine(str(repo), settings).commit_and_push()
        assert git(repo, "log", "-1", "--format=%s") == "WIP: Modified: 1 file [bot]"

    def test_first_commit_in_empty_repo(self, empty_repo):
        (empty_repo / "a.txt").write_text("a\n")
        result = GitSyncEngine(str(empty_repo)).commit_and_push()
        assert result.succeeded is True
        assert commit_count(empty_repo) == 1

    def test_pushes_to_first_remote(self, repo, bare_remote):
        git(repo, "remote", "add", "backup", str(bare_remote))
        (repo / "new.txt").write_text("x\n")

        result = GitSyncEngine(str(repo)).commit_and_push()

        assert result.succeeded is True
        assert result.message.startswith("Committed and pushed changes: Auto commit:")
        assert git(bare_remote, "rev-parse", "main") == git(repo, "rev-parse", "HEAD")
        assert GitSyncEngine(str(repo)).has_unpushed_commits() is False

    def test_detached_head_commits_but_does_not_push(self, repo, bare_remote):
        git(repo, "remote", "add", "origin", str(bare_remote))
        git(repo, "checkout", "-q", "--detach")
        (repo / "new.txt").write_text("x\n")

        result = GitSyncEngine(str(repo)).commit_and_push()

        assert result.succeeded is True
        assert "current branch could not be determined" in result.message

    def test_push_failure_keeps_commit(self, repo, tmp_path):
        git(repo, "remote", "add", "origin", str(tmp_path / "missing.git"))
        (repo / "new.txt").write_text("x\n")
        before = commit_count(repo)

        result = GitSyncEngine(str(repo)).commit_and_push()

        assert result.succeeded is False
        assert result.message.startswith("Commit and push failed: git push failed")
        # Not rolled back
        assert commit_count(repo) == before + 1

    @patch("githelper.sync.git.commit")
    def test_commit_failure_reported(self, mock_commit, repo):
        mock_commit.return_value = GitResult(returncode=1, stdout="", stderr="hook rejected")
        (repo / "new.txt").write_text("x\n")

        result = GitSyncEngine(str(repo)).commit_and_push()

        assert result.succeeded is False
        assert "hook rejected" in result.message

    @patch("githelper.sync.git.stage_all", side_effect=OSError("disk on fire"))
    def test_os_error_reported(self, _mock_stage, repo):
        (repo / "new.txt").write_text("x\n")
        result = GitSyncEngine(str(repo)).commit_and_push()
        assert result.succeeded is False
        assert "disk on fire" in result.message
