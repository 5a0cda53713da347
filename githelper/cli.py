#!/usr/bin/env python3
"""Git Helper CLI entrypoint."""

import sys
import argparse
import json
import logging
from pathlib import Path

from githelper.lib.config import load_settings
from githelper.lib.constants import EXIT_CONFIG, EXIT_ERROR, EXIT_SUCCESS
from githelper.plugin import GitHelperPlugin, PluginContext
from githelper.sync import GitSyncEngine
from githelper.workspace import WorkspaceCache, select_locator


def get_cache(args) -> WorkspaceCache:
    """Workspace cache rooted at --home or the default helper directory."""
    return WorkspaceCache(Path(args.home).expanduser() if args.home else None)


def cmd_actions(args):
    """Print the action list as JSON."""
    plugin = GitHelperPlugin(cache=get_cache(args))
    actions = plugin.get_actions(PluginContext(keyword=args.keyword or "", overlaid_app=args.app))
    print(json.dumps([a.model_dump(exclude_none=True) for a in actions], indent=2, ensure_ascii=False))
    return EXIT_SUCCESS


def cmd_run(args):
    """Execute an action against the cached workspace."""
    plugin = GitHelperPlugin(cache=get_cache(args))
    result = plugin.execute_action(args.action_id)
    print(result.message)
    return EXIT_SUCCESS


def cmd_workspace(args):
    """Resolve and print the workspace of an IDE."""
    locator = select_locator(args.app)
    if locator is None:
        print(f"ERROR: Unsupported application '{args.app}'")
        return EXIT_CONFIG

    ref = locator.locate()
    if ref is None:
        print(f"No workspace found for {args.app}")
        return EXIT_ERROR

    print(ref.path)
    return EXIT_SUCCESS


def _engine_for(args) -> GitSyncEngine:
    settings = load_settings(get_cache(args).cache_dir)
    return GitSyncEngine(str(Path(args.path).resolve()), settings)


def cmd_status(args):
    """Show git status of a directory."""
    engine = _engine_for(args)
    status = engine.get_status()
    if not status.is_repository:
        print(f"{args.path}: not a Git repository")
        return EXIT_ERROR

    print(f"Branch:         {status.branch or '(detached)'}")
    print(f"Changed files:  {status.changed_file_count}")
    if status.has_uncommitted_changes:
        print(f"Details:        {engine.get_changes_description()}")
    print(f"Unpushed:       {'yes' if status.has_unpushed_commits else 'no'}")
    return EXIT_SUCCESS


def cmd_sync(args):
    """Commit all changes in a directory and push them."""
    result = _engine_for(args).commit_and_push()
    print(result.message)
    return EXIT_SUCCESS if result.succeeded else EXIT_ERROR


def main(argv=None):
    parser = argparse.ArgumentParser(prog='githelper', description='IDE workspace Git helper')
    parser.add_argument('--home', help='Helper directory (default: $GIT_HELPER_HOME or ~/.coffic/git-helper)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # githelper actions
    p_actions = subparsers.add_parser('actions', help='List actions for an IDE workspace')
    p_actions.add_argument('--app', '-a', required=True, help='Overlaid application id (e.g., Code, Cursor)')
    p_actions.add_argument('--keyword', '-k', help='Filter by title/description')
    p_actions.set_defaults(func=cmd_actions)

    # githelper run
    p_run = subparsers.add_parser('run', help='Execute an action')
    p_run.add_argument('action_id', help='Action ID (git_status, git_commit_push)')
    p_run.set_defaults(func=cmd_run)

    # githelper workspace
    p_workspace = subparsers.add_parser('workspace', help='Show the workspace open in an IDE')
    p_workspace.add_argument('--app', '-a', required=True, help='Application id (e.g., Code, Cursor)')
    p_workspace.set_defaults(func=cmd_workspace)

    # githelper status
    p_status = subparsers.add_parser('status', help='Show git status of a directory')
    p_status.add_argument('path', nargs='?', default='.', help='Directory (default: current)')
    p_status.set_defaults(func=cmd_status)

    # githelper sync
    p_sync = subparsers.add_parser('sync', help='Commit all changes and push')
    p_sync.add_argument('path', nargs='?', default='.', help='Directory (default: current)')
    p_sync.set_defaults(func=cmd_sync)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
