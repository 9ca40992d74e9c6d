"""Data models for easy-ws-git."""

from .commit import CommitInfo
from .review import ReviewSession, ReviewStep

__all__ = ["CommitInfo", "ReviewSession", "ReviewStep"]
