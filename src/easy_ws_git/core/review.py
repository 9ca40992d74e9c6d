"""Commit-by-commit review of a branch range."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Optional

from easy_ws_git.core.editor import SublimeEditor
from easy_ws_git.core.errors import (
    DirtyWorkingTree,
    GitOperationError,
    InvalidArgumentCount,
    InvalidRange,
)
from easy_ws_git.core.repository import GitRepository
from easy_ws_git.models.commit import CommitInfo
from easy_ws_git.models.review import ReviewSession, ReviewStep

logger = logging.getLogger(__name__)

MESSAGE_FILENAME = "commit_message.txt"
SEPARATOR = "#" * 66


def write_message_file(commit: CommitInfo, index: int, total: int) -> Path:
    """Write a commit message with a progress footer to a fresh temp directory."""
    directory = Path(tempfile.mkdtemp(prefix="easy-ws-git-review-"))
    message_file = directory / MESSAGE_FILENAME
    message_file.write_text(
        f"{commit.message.rstrip()}\n{SEPARATOR}\n# {index} of {total}\n",
        encoding="utf-8",
    )
    return message_file


class ReviewWalker:
    """Walks the non-merge commits between two refs, one editor view each.

    For every commit the walker checks it out, opens the repository in a new
    window and then opens the changed files together with the commit message,
    waiting for the reviewer to close them before moving on. The ref checked
    out at the start is restored afterwards, also when a step fails or the
    review is interrupted.
    """

    def __init__(
        self,
        repository: GitRepository,
        editor: SublimeEditor,
        cleanup_scratch: bool = True,
        open_repo_window: bool = True,
        on_step: Optional[Callable[[ReviewStep], None]] = None,
    ):
        self.repository = repository
        self.editor = editor
        self.cleanup_scratch = cleanup_scratch
        self.open_repo_window = open_repo_window
        self.on_step = on_step

    def review(self, *refs: str) -> ReviewSession:
        """Review every commit in ``refs[1]..refs[0]``.

        Args:
            refs: The branch to review up to, then the branch it started from.

        Returns:
            The finished review session.

        Raises:
            DirtyWorkingTree: If the working tree or index has changes.
            InvalidArgumentCount: If not exactly two refs are given.
            InvalidRange: If the second ref is not an ancestor of the first.
        """
        if not self.repository.is_clean():
            raise DirtyWorkingTree(
                f"Uncommitted changes in {self.repository.root}; "
                "commit or stash them before reviewing"
            )

        if len(refs) != 2:
            raise InvalidArgumentCount(
                f"Expected exactly two refs (TO_BRANCH FROM_BRANCH), got {len(refs)}"
            )

        to_ref, from_ref = refs
        self._check_range(from_ref, to_ref)

        session = ReviewSession(
            start_ref=self.repository.current_ref(),
            from_ref=from_ref,
            to_ref=to_ref,
            commits=self.repository.list_commits(from_ref, to_ref),
        )
        if session.is_empty:
            logger.info("No commits to review in %s..%s", from_ref, to_ref)
            return session

        try:
            total = len(session.commits)
            for index, commit in enumerate(session.commits, start=1):
                session.steps.append(self._review_commit(commit, index, total))
        except BaseException as error:
            logger.warning(
                "Review stopped at commit %d of %d: %r",
                len(session.steps) + 1,
                len(session.commits),
                error,
            )
            self._restore(session.start_ref, error)
            raise

        self._restore(session.start_ref)
        return session

    def _restore(self, start_ref: str, error: Optional[BaseException] = None) -> None:
        logger.debug("Restoring %s", start_ref)
        try:
            self.repository.checkout(start_ref)
        except GitOperationError as restore_error:
            if error is None:
                raise
            raise GitOperationError(
                f"Could not restore {start_ref} after the review stopped "
                f"({error!r}): {restore_error}"
            ) from error

    def _check_range(self, from_ref: str, to_ref: str) -> None:
        try:
            is_ancestor = self.repository.is_ancestor(from_ref, to_ref)
        except GitOperationError as e:
            raise InvalidRange(f"Invalid range {from_ref}..{to_ref}: {e}") from e
        if not is_ancestor:
            raise InvalidRange(f"{from_ref} is not an ancestor of {to_ref}")

    def _review_commit(self, commit: str, index: int, total: int) -> ReviewStep:
        self.repository.checkout(commit)

        root = self.repository.root
        info = self.repository.commit_info(commit)
        changed_files = [root / path for path in self.repository.changed_files(commit)]

        if self.open_repo_window:
            self.editor.open_window(root)

        message_file = write_message_file(info, index, total)
        logger.debug("Wrote commit message for %s to %s", commit, message_file)

        step = ReviewStep(
            index=index,
            total=total,
            commit=info,
            changed_files=changed_files,
            message_file=message_file,
        )
        if self.on_step is not None:
            self.on_step(step)

        try:
            self.editor.open_blocking(changed_files + [message_file])
        finally:
            if self.cleanup_scratch:
                shutil.rmtree(message_file.parent, ignore_errors=True)

        return step
