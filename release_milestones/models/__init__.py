"""Data models for milestones, releases and issue records (Pydantic)."""

from release_milestones.models.issue import IssueRecord
from release_milestones.models.milestone import Milestone
from release_milestones.models.release import Release

__all__ = ["IssueRecord", "Milestone", "Release"]
