"""
Plugin host adapter.

Answers the host's two requests:
- get_actions: which git actions apply to the overlaid IDE's workspace.
- execute_action: run one of them.

Action listing happens while the IDE is in front, so it resolves the
workspace live and caches it. Execution happens later without access to
the IDE, so it reads the cache first and only re-resolves once if the
cache misses.
"""

import logging
from typing import Callable, Optional

from pydantic import BaseModel

from githelper import __version__
from githelper.lib.config import Settings, load_settings
from githelper.lib.constants import ACTION_GIT_COMMIT_PUSH, ACTION_GIT_STATUS
from githelper.sync import GitSyncEngine
from githelper.workspace import WorkspaceCache, WorkspaceLocator, select_locator

logger = logging.getLogger(__name__)

PLUGIN_NAME = "Git Helper"
PLUGIN_DESCRIPTION = "Check the Git status of the current IDE workspace and auto commit/push changes"

MSG_WORKSPACE_UNAVAILABLE = "Could not determine the workspace path, please reopen the IDE"
MSG_NOT_A_REPOSITORY = "The current workspace is not a Git repository"


class PluginContext(BaseModel):
    """Input for an action-list request."""
    keyword: str = ""
    overlaid_app: str = ""


class Action(BaseModel):
    """An entry in the action list."""
    id: str
    title: str
    description: str
    icon: Optional[str] = None


class ActionResult(BaseModel):
    """Output of an action execution."""
    message: str


def filter_actions(actions: list[Action], keyword: str) -> list[Action]:
    """Keep actions whose title or description contains keyword (case-insensitive)."""
    if not keyword:
        return actions
    lower_keyword = keyword.lower()
    return [
        a for a in actions
        if lower_keyword in a.title.lower() or lower_keyword in a.description.lower()
    ]


class GitHelperPlugin:
    """Coordinates locators, the workspace cache and the sync engine."""

    name = PLUGIN_NAME
    description = PLUGIN_DESCRIPTION
    version = __version__

    def __init__(
        self,
        cache: Optional[WorkspaceCache] = None,
        settings: Optional[Settings] = None,
        locator_factory: Callable[[str], Optional[WorkspaceLocator]] = select_locator,
    ):
        self.cache = cache if cache is not None else WorkspaceCache()
        self.settings = settings if settings is not None else load_settings(self.cache.cache_dir)
        self.locator_factory = locator_factory

    def _engine(self, workspace: str) -> GitSyncEngine:
        return GitSyncEngine(workspace, self.settings)

    def _resolve_live(self, app_id: str) -> Optional[str]:
        """Query the IDE's storage for app_id and cache the outcome.

        A failed lookup is cached as null only when the app has no entry
        yet, so an earlier resolved path is never overwritten by a miss.
        """
        locator = self.locator_factory(app_id)
        if locator is None:
            return None
        ref = locator.locate()
        workspace = ref.path if ref else None
        if workspace or not self.cache.has_entry(app_id):
            self.cache.save_workspace(app_id, workspace)
        return workspace

    def get_actions(self, context: PluginContext) -> list[Action]:
        """List the actions available for the overlaid IDE's workspace."""
        logger.info(f"Listing actions, keyword: {context.keyword!r}, app: {context.overlaid_app!r}")
        try:
            return self._get_actions(context)
        except Exception as e:
            logger.exception(f"Failed to list actions: {e}")
            return []

    def _get_actions(self, context: PluginContext) -> list[Action]:
        app_id = context.overlaid_app
        if self.locator_factory(app_id) is None:
            logger.debug(f"Unsupported application {app_id!r}, no actions")
            return []

        self.cache.save_current_app(app_id)

        workspace = self._resolve_live(app_id)
        if not workspace:
            logger.debug(f"No workspace for {app_id}, no actions")
            return []

        status = self._engine(workspace).get_status()

        actions = []
        if status.is_repository:
            description = f"Branch: {status.branch}, Changed files: {status.changed_file_count}"
            if status.has_unpushed_commits:
                description += ", unpushed commits"
            actions.append(Action(
                id=ACTION_GIT_STATUS,
                title="Git status",
                description=description,
                icon="📊",
            ))

            if status.has_uncommitted_changes:
                actions.append(Action(
                    id=ACTION_GIT_COMMIT_PUSH,
                    title="Auto commit and push changes",
                    description=(
                        f"Commit the {status.changed_file_count} changed files in this workspace "
                        f"and push them to the remote repository"
                    ),
                    icon="🚀",
                ))

        filtered = filter_actions(actions, context.keyword)
        if context.keyword:
            logger.info(f"Returning {len(filtered)} actions after filtering")
        return filtered

    def _cached_workspace(self) -> Optional[str]:
        """Workspace from the cache, falling back once to a live lookup."""
        workspace = self.cache.get_workspace()
        if workspace:
            return workspace

        current_app = self.cache.get_current_app()
        logger.warning(f"No cached workspace for application {current_app!r}")
        if not current_app:
            return None
        return self._resolve_live(current_app)

    def execute_action(self, action_id: str) -> ActionResult:
        """Run an action against the cached workspace."""
        logger.info(f"Executing action: {action_id}")
        try:
            return self._execute_action(action_id)
        except Exception as e:
            logger.exception(f"Action {action_id} failed: {e}")
            return ActionResult(message=f"Execution failed: {e}")

    def _execute_action(self, action_id: str) -> ActionResult:
        if action_id not in (ACTION_GIT_STATUS, ACTION_GIT_COMMIT_PUSH):
            return ActionResult(message=f"Unknown action: {action_id}")

        workspace = self._cached_workspace()
        if not workspace:
            return ActionResult(message=MSG_WORKSPACE_UNAVAILABLE)

        engine = self._engine(workspace)
        if not engine.is_repository():
            return ActionResult(message=MSG_NOT_A_REPOSITORY)

        if action_id == ACTION_GIT_COMMIT_PUSH:
            return ActionResult(message=engine.commit_and_push().message)

        status = engine.get_status()
        lines = [
            f"Branch: {status.branch}",
            f"Changed files: {status.changed_file_count}",
        ]
        if status.has_uncommitted_changes:
            lines.append(f"Details: {engine.get_changes_description()}")
        if status.has_unpushed_commits:
            lines.append("Unpushed commits present")
        return ActionResult(message="\n".join(lines))
