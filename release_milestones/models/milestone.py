"""Milestone model."""

from datetime import datetime

from pydantic import BaseModel


class Milestone(BaseModel):
    """Named grouping of issues and pull requests, usually one per release.

    Titles carry a fixed prefix followed by the release series,
    e.g. ``Gutenberg 16.2``.
    """

    number: int
    title: str
    state: str = "open"
    description: str | None = None
    html_url: str | None = None
    due_on: datetime | None = None
    closed_at: datetime | None = None
