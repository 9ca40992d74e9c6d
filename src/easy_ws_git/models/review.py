"""Review session models."""

from pathlib import Path
from typing import List

from pydantic import BaseModel

from .commit import CommitInfo


class ReviewStep(BaseModel):
    """One commit presented to the reviewer."""

    index: int
    total: int
    commit: CommitInfo
    message_file: Path
    changed_files: List[Path] = []

    @property
    def progress(self) -> str:
        """Progress footer, e.g. ``2 of 5``."""
        return f"{self.index} of {self.total}"


class ReviewSession(BaseModel):
    """Transient state of a commit-by-commit review."""

    start_ref: str
    from_ref: str
    to_ref: str
    commits: List[str] = []
    steps: List[ReviewStep] = []

    @property
    def is_empty(self) -> bool:
        """Check if the range holds nothing to review."""
        return not self.commits

    @property
    def is_complete(self) -> bool:
        """Check if every commit in the range has been reviewed."""
        return len(self.steps) == len(self.commits)
