"""Milestone and release queries for release automation."""

from release_milestones.milestone import get_issues_by_milestone, get_milestone_by_title

__all__ = ["get_issues_by_milestone", "get_milestone_by_title"]
