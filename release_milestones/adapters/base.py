"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterator, List

from release_milestones.models import IssueRecord, Milestone, Release


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(GitPlatformError):
    """Raised when the requested resource does not exist (HTTP 404)."""


class GitPlatformAdapter(ABC):
    """Read-only interface over a hosting platform's milestone, release and
    issue endpoints.

    Paginated endpoints return lazy iterators of pages: nothing is
    requested until the iterator is advanced, and each call starts from
    the first page.
    """

    @abstractmethod
    def iter_milestone_pages(
        self,
        owner: str,
        repo: str,
        state: str = "open",
    ) -> Iterator[List[Milestone]]:
        """Yield milestones of a repository, one page at a time."""
        ...

    @abstractmethod
    def get_milestone(self, owner: str, repo: str, milestone_number: int) -> Milestone:
        """Fetch milestone by number."""
        ...

    @abstractmethod
    def iter_release_pages(self, owner: str, repo: str) -> Iterator[List[Release]]:
        """Yield releases of a repository, one page at a time."""
        ...

    @abstractmethod
    def iter_issue_pages(
        self,
        owner: str,
        repo: str,
        milestone: int,
        state: str | None = None,
        since: datetime | None = None,
    ) -> Iterator[List[IssueRecord]]:
        """Yield issues and pull requests of a milestone, one page at a time."""
        ...
