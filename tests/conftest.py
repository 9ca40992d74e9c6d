"""Shared fixtures for easy-ws-git tests."""

import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest
from git import Repo

from easy_ws_git.core.errors import EditorError
from easy_ws_git.core.repository import GitRepository


def commit_file(repo: Repo, relative_path: str, content: str, message: str) -> str:
    """Write a file, commit it and return the commit hash."""
    file_path = Path(repo.working_tree_dir) / relative_path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    repo.index.add([relative_path])
    return repo.index.commit(message).hexsha


class CountingRepository(GitRepository):
    """GitRepository that records every checkout."""

    def __init__(self, root: Path, repo: Optional[Repo] = None):
        super().__init__(root, repo)
        self.checkouts: List[str] = []

    def checkout(self, ref: str) -> None:
        self.checkouts.append(ref)
        super().checkout(ref)


class RecordingEditor:
    """Stand-in for SublimeEditor that records what the reviewer would see."""

    def __init__(self, repo: Optional[Repo] = None, fail_on_view: Optional[int] = None):
        self.repo = repo
        self.fail_on_view = fail_on_view
        self.windows: List[Path] = []
        self.views: List[List[Path]] = []
        self.messages: List[str] = []
        self.heads: List[str] = []
        self.commands: List[Tuple[str, dict]] = []

    def open_window(self, path: Path) -> None:
        self.windows.append(Path(path))

    def open_blocking(self, paths: Sequence[Path]) -> None:
        paths = [Path(p) for p in paths]
        self.views.append(paths)
        self.messages.append(paths[-1].read_text())
        if self.repo is not None:
            self.heads.append(self.repo.head.commit.hexsha)
        if self.fail_on_view is not None and len(self.views) == self.fail_on_view:
            raise EditorError("subl exited with status 1")

    def run_command(self, name: str, args: Optional[dict] = None) -> None:
        self.commands.append((name, args))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config lookup at an empty temp location."""
    monkeypatch.setenv("EASY_WS_GIT_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.delenv("EASY_WS_GIT_EDITOR", raising=False)


@pytest.fixture
def git_project():
    """Create a repository with a tagged release history.

    History (all on ``release``)::

        initial (v1.0) -> add feature (v1.1) -> fix feature (v1.2)

    The branch ``feature-x`` points at ``v1.0`` and is checked out.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir) / "demo-project"
        project_path.mkdir()

        repo = Repo.init(project_path)
        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        commit_file(repo, "README.md", "# Demo\n", "Initial commit")
        repo.create_tag("v1.0")
        repo.git.checkout("-b", "release")

        commit_file(repo, "src/feature.py", "def feature():\n    pass\n", "Add feature")
        repo.create_tag("v1.1")
        commit_file(
            repo,
            "src/feature.py",
            "def feature():\n    return 42\n",
            "Fix feature\n\nReturn the answer instead of None.",
        )
        repo.create_tag("v1.2")

        repo.git.checkout("-b", "feature-x", "v1.0")

        yield project_path, repo
