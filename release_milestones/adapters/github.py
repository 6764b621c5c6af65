"""GitHub API adapter."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, TypeVar

import requests

from release_milestones.adapters.base import GitPlatformAdapter, GitPlatformError, NotFoundError
from release_milestones.models import IssueRecord, Milestone, Release

T = TypeVar("T")

log = logging.getLogger("release_milestones.adapters.github")


def _format_since(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _milestone_from_api(data: Dict[str, Any]) -> Milestone:
    return Milestone.model_validate(data)


def _release_from_api(data: Dict[str, Any]) -> Release:
    # Releases created from a bare tag have a null name.
    return Release(
        name=data.get("name") or "",
        tag_name=data.get("tag_name") or "",
        published_at=data.get("published_at"),
        draft=bool(data.get("draft", False)),
        prerelease=bool(data.get("prerelease", False)),
    )


def _issue_from_api(data: Dict[str, Any]) -> IssueRecord:
    return IssueRecord.model_validate(data)


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation of GitPlatformAdapter."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: int = 30,
        per_page: int = 100,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.per_page = per_page
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, url: str, **kwargs: object) -> requests.Response:
        if url.startswith("/"):
            url = f"{self.api_url}{url}"
        resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        if resp.status_code == 404:
            raise NotFoundError(f"Not found: {url}", status_code=404)
        if resp.status_code >= 400:
            msg = resp.text
            try:
                data = resp.json()
                if isinstance(data, dict) and "message" in data:
                    msg = data["message"]
            except ValueError:
                pass
            raise GitPlatformError(f"GitHub API error {resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def _iter_pages(
        self,
        path: str,
        params: Dict[str, Any],
        parse: Callable[[Dict[str, Any]], T],
    ) -> Iterator[List[T]]:
        """Follow ``Link: rel="next"`` headers, yielding parsed items per page.

        The next URL already carries the query string, so params are only
        sent with the first request.
        """
        url: str | None = path
        query: Dict[str, Any] | None = {**params, "per_page": self.per_page}
        page = 1
        while url:
            log.debug("GET %s (page %d)", url, page)
            resp = self._request("GET", url, params=query)
            data = resp.json()
            if not isinstance(data, list):
                raise GitPlatformError(f"Unexpected payload for {path}: expected a list")
            yield [parse(item) for item in data]
            url = resp.links.get("next", {}).get("url")
            query = None
            page += 1

    def iter_milestone_pages(
        self,
        owner: str,
        repo: str,
        state: str = "open",
    ) -> Iterator[List[Milestone]]:
        """List milestones of a repository, page by page.

        Args:
            owner: Repository owner
            repo: Repository name
            state: open, closed or all

        Yields:
            One list of Milestone per API page
        """
        return self._iter_pages(
            f"/repos/{owner}/{repo}/milestones",
            {"state": state},
            _milestone_from_api,
        )

    def get_milestone(self, owner: str, repo: str, milestone_number: int) -> Milestone:
        """Fetch a single milestone by number.

        Raises:
            NotFoundError: If the milestone does not exist
            GitPlatformError: On any other API error
        """
        resp = self._request("GET", f"/repos/{owner}/{repo}/milestones/{milestone_number}")
        return _milestone_from_api(resp.json())

    def iter_release_pages(self, owner: str, repo: str) -> Iterator[List[Release]]:
        """List releases of a repository (newest first), page by page."""
        return self._iter_pages(f"/repos/{owner}/{repo}/releases", {}, _release_from_api)

    def iter_issue_pages(
        self,
        owner: str,
        repo: str,
        milestone: int,
        state: str | None = None,
        since: datetime | None = None,
    ) -> Iterator[List[IssueRecord]]:
        """List issues and pull requests of a milestone, page by page.

        ``since`` is applied by GitHub to the update time, not the close time.
        """
        params: Dict[str, Any] = {"milestone": milestone}
        if state is not None:
            params["state"] = state
        if since is not None:
            params["since"] = _format_since(since)
        return self._iter_pages(f"/repos/{owner}/{repo}/issues", params, _issue_from_api)
