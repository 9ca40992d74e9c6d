"""Commit model for commits visited during a review."""

from pydantic import BaseModel


class CommitInfo(BaseModel):
    """A commit as shown to the reviewer."""

    short_hash: str
    hexsha: str
    summary: str
    message: str
