"""Milestone queries for release tooling.

Answers "what changed since the last release in this series?" for a
milestone such as ``Gutenberg 16.2``: the series (``16.2``) is derived from
the milestone title, the latest release whose name starts with the series
gives a cutoff, and only issues closed after that cutoff are returned.
"""

import logging
from typing import List, NamedTuple, Optional

from release_milestones.adapters.base import GitPlatformAdapter
from release_milestones.models import IssueRecord, Milestone, Release

log = logging.getLogger("release_milestones.milestone")

DEFAULT_TITLE_PREFIX = "Gutenberg "

ISSUE_STATES = ("open", "closed", "all")


class SeriesPrefixError(ValueError):
    """Raised when a milestone title does not start with the expected prefix."""


class Series(NamedTuple):
    """Release series derived from a milestone title."""

    name: str
    prefix_matched: bool


def derive_series(title: str, prefix: str = DEFAULT_TITLE_PREFIX) -> Series:
    """Strip ``prefix`` from a milestone title.

    A title without the prefix is returned whole, with ``prefix_matched``
    set to False so callers can tell the two cases apart.
    """
    if prefix and title.startswith(prefix):
        return Series(title[len(prefix) :], True)
    return Series(title, False)


def get_milestone_by_title(
    client: GitPlatformAdapter,
    owner: str,
    repo: str,
    title: str,
    state: str = "open",
) -> Optional[Milestone]:
    """Return the first milestone whose title equals ``title``, if any.

    Pages are requested lazily and iteration stops at the first match.
    """
    for page in client.iter_milestone_pages(owner, repo, state=state):
        for milestone in page:
            if milestone.title == title:
                return milestone
    return None


def find_latest_release(
    client: GitPlatformAdapter,
    owner: str,
    repo: str,
    series: str,
) -> Optional[Release]:
    """Return the first release (API order, newest first) named after ``series``."""
    for page in client.iter_release_pages(owner, repo):
        for release in page:
            if release.name.startswith(series):
                return release
    return None


def get_issues_by_milestone(
    client: GitPlatformAdapter,
    owner: str,
    repo: str,
    milestone_number: int,
    state: str | None = None,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
    strict_prefix: bool = False,
) -> List[IssueRecord]:
    """Collect issues and pull requests of a milestone closed since the last
    release in its series.

    Args:
        client: Platform adapter used for every request
        owner: Repository owner
        repo: Repository name
        milestone_number: Milestone number
        state: open, closed or all; None leaves the API default
        title_prefix: Literal prefix stripped from the milestone title
        strict_prefix: Raise SeriesPrefixError when the title lacks the prefix

    Returns:
        Records in API order. When a release of the series exists, only
        records closed strictly after its publication are kept.

    Raises:
        ValueError: If ``state`` is not one of open, closed, all
        SeriesPrefixError: If ``strict_prefix`` and the prefix is missing
        GitPlatformError: Propagated from the client
    """
    if state is not None and state not in ISSUE_STATES:
        raise ValueError(f"Invalid issue state {state!r}; expected one of {', '.join(ISSUE_STATES)}")

    milestone = client.get_milestone(owner, repo, milestone_number)
    series = derive_series(milestone.title, title_prefix)
    if not series.prefix_matched:
        if strict_prefix:
            raise SeriesPrefixError(f"Milestone title {milestone.title!r} does not start with {title_prefix!r}")
        log.warning(
            "Milestone title %r does not start with %r; matching releases against the full title",
            milestone.title,
            title_prefix,
        )

    latest_release = find_latest_release(client, owner, repo, series.name)
    cutoff = latest_release.published_at if latest_release is not None else None
    if latest_release is None:
        log.info("No release found for series %r", series.name)
    else:
        log.info("Latest release in series %r: %r published at %s", series.name, latest_release.name, cutoff)

    records: List[IssueRecord] = []
    for page in client.iter_issue_pages(owner, repo, milestone_number, state=state, since=cutoff):
        records.extend(page)

    if cutoff is None:
        log.info("Collected %d records for milestone %r", len(records), milestone.title)
        return records

    # "since" filters on update time; closing time needs a client-side check.
    closed_after = [r for r in records if r.closed_at is not None and r.closed_at > cutoff]
    log.info(
        "Collected %d of %d records for milestone %r closed after %s",
        len(closed_after),
        len(records),
        milestone.title,
        cutoff,
    )
    return closed_after
