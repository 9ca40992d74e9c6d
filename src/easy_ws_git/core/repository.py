"""Git repository queries used by the workspace and review commands."""

import logging
from pathlib import Path
from typing import List, Optional

import git
from git import Repo

from easy_ws_git.core.errors import GitOperationError, NotARepository
from easy_ws_git.models.commit import CommitInfo

logger = logging.getLogger(__name__)

# Hash of git's empty tree, used as the parent of root commits.
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class GitRepository:
    """A git working tree, resolved once and passed to every operation."""

    def __init__(self, root: Path, repo: Optional[Repo] = None):
        self.root = Path(root).resolve()
        self._repo = repo

    @classmethod
    def discover(cls, path: Path) -> "GitRepository":
        """Find the working tree containing ``path``.

        Raises:
            NotARepository: If ``path`` is not inside a git working tree.
        """
        try:
            repo = Repo(Path(path), search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise NotARepository(f"Not a git repository: {path}") from e

        if repo.bare or repo.working_tree_dir is None:
            raise NotARepository(f"Not a git working tree: {path}")

        return cls(Path(repo.working_tree_dir), repo)

    @property
    def repo(self) -> Repo:
        """Get the GitPython repository."""
        if self._repo is None:
            self._repo = Repo(self.root)
        return self._repo

    @property
    def name(self) -> str:
        """Get the repository directory name."""
        return self.root.name

    def run_git_command(self, args: List[str]) -> str:
        """Run a git command in the working tree and return its output."""
        if not args:
            raise GitOperationError("No git command specified")

        command = args[0].replace("-", "_")
        try:
            git_method = getattr(self.repo.git, command)
            return git_method(*args[1:])
        except git.exc.GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise GitOperationError(
                f"git {' '.join(args)} failed: {stderr or e}"
            ) from e

    def is_clean(self) -> bool:
        """Check that neither the working tree nor the index has changes.

        Untracked files are ignored.
        """
        return not self.repo.is_dirty(
            index=True, working_tree=True, untracked_files=False
        )

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Check if ``ancestor`` is reachable from ``descendant``."""
        try:
            return self.repo.is_ancestor(ancestor, descendant)
        except git.exc.GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise GitOperationError(
                f"Cannot compare {ancestor} and {descendant}: {stderr or e}"
            ) from e

    def list_commits(self, from_ref: str, to_ref: str) -> List[str]:
        """List abbreviated ids of non-merge commits in ``from_ref..to_ref``.

        Commits are returned oldest first.
        """
        output = self.run_git_command(
            [
                "rev-list",
                "--reverse",
                "--abbrev-commit",
                "--no-merges",
                f"{from_ref}..{to_ref}",
            ]
        )
        return output.split()

    def _resolve_commit(self, ref: str) -> git.Commit:
        try:
            return self.repo.commit(ref)
        except (git.exc.BadName, ValueError) as e:
            raise GitOperationError(f"Unknown commit: {ref}") from e

    def commit_info(self, ref: str) -> CommitInfo:
        """Get the commit details shown to the reviewer."""
        commit = self._resolve_commit(ref)
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8")
        return CommitInfo(
            short_hash=ref,
            hexsha=commit.hexsha,
            summary=message.split("\n", 1)[0],
            message=message,
        )

    def commit_message(self, ref: str) -> str:
        """Get the full message of a commit."""
        return self.commit_info(ref).message

    def changed_files(self, ref: str) -> List[str]:
        """List paths changed by a commit relative to its first parent.

        Paths deleted by the commit are left out. A root commit is compared
        with the empty tree.
        """
        commit = self._resolve_commit(ref)
        parent = f"{commit.hexsha}^" if commit.parents else EMPTY_TREE_SHA
        # -z keeps paths verbatim instead of C-quoting non-ASCII names.
        output = self.run_git_command(
            ["diff", "--name-only", "-z", "--diff-filter=d", parent, commit.hexsha]
        )
        return [path for path in output.split("\0") if path]

    def checkout(self, ref: str) -> None:
        """Check out a branch or commit."""
        logger.debug("Checking out %s in %s", ref, self.root)
        self.run_git_command(["checkout", ref])

    def current_ref(self) -> str:
        """Get the checked out branch, or the commit hash if HEAD is detached."""
        if self.repo.head.is_detached:
            return self.repo.head.commit.hexsha
        return self.repo.active_branch.name

    def current_branch_name(self) -> str:
        """Get the abbreviated name of HEAD, ``HEAD`` when detached."""
        return self.run_git_command(["rev-parse", "--abbrev-ref", "HEAD"]).strip()
