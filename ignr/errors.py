"""Exception types surfaced by ignr pipelines."""

from __future__ import annotations


class IgnrError(RuntimeError):
    """Base class for failures reported to the user."""


class ConfigError(IgnrError):
    """Raised when the configuration file cannot be parsed."""


class NotAGitRepositoryError(IgnrError):
    """Raised when generating outside of a git work tree without ``force``."""


class SyncError(IgnrError):
    """Raised when the remote template list cannot be fetched."""


__all__ = ["ConfigError", "IgnrError", "NotAGitRepositoryError", "SyncError"]
