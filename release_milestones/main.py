"""release-milestones entry point.

Two commands: ``milestone TITLE`` prints the milestone with that title and
``changes NUMBER`` prints the issues and pull requests closed since the last
release in the milestone's series. Usage: release-milestones [-c config.yaml]
milestone "Gutenberg 16.2" | release-milestones changes 250.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

import requests

from release_milestones.adapters import GitHubAdapter, GitPlatformError
from release_milestones.config import AppConfig, load_config
from release_milestones.logging import setup_logging
from release_milestones.milestone import (
    ISSUE_STATES,
    SeriesPrefixError,
    get_issues_by_milestone,
    get_milestone_by_title,
)
from release_milestones.models import IssueRecord

log = logging.getLogger("release_milestones")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse global options and the milestone | changes subcommand."""
    parser = argparse.ArgumentParser(
        prog="release-milestones",
        description="Find milestones and the changes closed since the last release in their series",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument("--owner", help="Repository owner (overrides config)")
    parser.add_argument("--repo", help="Repository name (overrides config)")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    sub = parser.add_subparsers(dest="command")

    milestone = sub.add_parser("milestone", help="Print the milestone with the given title")
    milestone.add_argument("title", help='Exact milestone title, e.g. "Gutenberg 16.2"')
    milestone.add_argument("--state", choices=ISSUE_STATES, default="open", help="Milestone state filter")

    changes = sub.add_parser("changes", help="Print issues closed since the last release of the series")
    target = changes.add_mutually_exclusive_group(required=True)
    target.add_argument("number", nargs="?", type=int, help="Milestone number")
    target.add_argument("--title", help="Resolve the milestone number from its title")
    changes.add_argument("--state", choices=ISSUE_STATES, default=None, help="Issue state filter")
    changes.add_argument(
        "--format",
        choices=("json", "markdown"),
        default="json",
        help="Output format",
    )

    args = parser.parse_args(argv)
    if args.command is None and not args.check:
        parser.error("a command is required (milestone | changes)")
    return args


def format_markdown(records: List[IssueRecord]) -> str:
    """One ``- title (#number)`` line per record."""
    return "\n".join(f"- {r.title} (#{r.number})" for r in records)


def _run(args: argparse.Namespace, config: AppConfig, out) -> int:
    owner = args.owner or config.repository.owner
    repo = args.repo or config.repository.name
    client = GitHubAdapter(
        token=config.github_token_resolved,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
        per_page=config.github.per_page,
    )

    if args.command == "milestone":
        found = get_milestone_by_title(client, owner, repo, args.title, state=args.state)
        if found is None:
            log.error("Milestone %r not found in %s/%s", args.title, owner, repo)
            return 1
        out.write(found.model_dump_json(indent=2) + "\n")
        return 0

    number = args.number
    if args.title is not None:
        found = get_milestone_by_title(client, owner, repo, args.title, state="all")
        if found is None:
            log.error("Milestone %r not found in %s/%s", args.title, owner, repo)
            return 1
        number = found.number

    records = get_issues_by_milestone(
        client,
        owner,
        repo,
        number,
        state=args.state,
        title_prefix=config.milestones.title_prefix,
        strict_prefix=config.milestones.strict_prefix,
    )
    if args.format == "markdown":
        out.write(format_markdown(records) + "\n")
    else:
        out.write(json.dumps([r.raw() for r in records], indent=2) + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, set up logging, dispatch command."""
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config.logging)

    if args.check:
        print("Config OK:", f"{config.repository.owner}/{config.repository.name}")
        return 0

    try:
        return _run(args, config, sys.stdout)
    except (GitPlatformError, SeriesPrefixError) as e:
        log.error("%s", e)
        return 1
    except requests.RequestException as e:
        log.exception("Request failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
