"""Mapping between git branches and EasyWorkspace files."""

import logging
from typing import Optional

from easy_ws_git.core.config import EasyWorkspaceConfig
from easy_ws_git.core.editor import SublimeEditor
from easy_ws_git.core.repository import GitRepository

logger = logging.getLogger(__name__)


def workspace_name(repository: GitRepository, branch: Optional[str] = None) -> str:
    """Get the EasyWorkspace filename for a branch.

    Args:
        repository: Repository the branch belongs to.
        branch: Branch name. Defaults to the current branch.

    Returns:
        ``<repository name>/<branch>``.
    """
    if not branch:
        branch = repository.current_branch_name()
    return f"{repository.name}/{branch}"


def edit(
    repository: GitRepository,
    editor: SublimeEditor,
    branch: Optional[str] = None,
    config: Optional[EasyWorkspaceConfig] = None,
) -> str:
    """Open the workspace of a branch in a new editor window.

    An empty workspace is opened, and the association created, when the
    branch has no workspace yet.
    """
    config = config or EasyWorkspaceConfig()
    name = workspace_name(repository, branch)
    logger.debug("Opening workspace %s", name)
    editor.run_command(config.open_command, {"filename": name})
    return name


def save(
    repository: GitRepository,
    editor: SublimeEditor,
    branch: Optional[str] = None,
    config: Optional[EasyWorkspaceConfig] = None,
) -> str:
    """Save the most recently active editor window as a branch's workspace."""
    config = config or EasyWorkspaceConfig()
    name = workspace_name(repository, branch)
    logger.debug("Saving workspace %s", name)
    editor.run_command(config.save_command, {"filename": name})
    return name
