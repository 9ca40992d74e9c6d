"""Errors raised by easy-ws-git."""


class EasyWorkspaceError(Exception):
    """Base class for all easy-ws-git failures."""


class NotARepository(EasyWorkspaceError):
    """The given path is not inside a git working tree."""


class DirtyWorkingTree(EasyWorkspaceError):
    """The working tree or the index has uncommitted changes."""


class InvalidArgumentCount(EasyWorkspaceError):
    """A command received the wrong number of refs."""


class InvalidRange(EasyWorkspaceError):
    """The review range is not an ancestor range."""


class GitOperationError(EasyWorkspaceError):
    """A git command failed."""


class EditorError(EasyWorkspaceError):
    """The editor could not be started or exited with an error."""


class ConfigError(EasyWorkspaceError):
    """The configuration file is unreadable or invalid."""
