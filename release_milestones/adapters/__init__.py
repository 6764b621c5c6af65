"""Git platform adapters."""

from release_milestones.adapters.base import GitPlatformAdapter, GitPlatformError, NotFoundError
from release_milestones.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter", "NotFoundError"]
