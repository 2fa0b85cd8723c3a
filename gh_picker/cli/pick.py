"""CLI commands opening the pickers."""

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path

import typer
from rich.console import Console

from ..config import load_config
from ..github_client.client import GitHubClient
from ..pickers import Pickers, PickerOptions
from ..presentation.rich_picker import RichPicker
from ..reporting import Reporter
from ..templates import load_templates
from .options import (
    ASSIGNEE_OPTION,
    BASE_OPTION,
    CONFIG_OPTION,
    CREATED_BY_OPTION,
    HEAD_OPTION,
    LABELS_OPTION,
    MENTIONED_OPTION,
    MILESTONE_OPTION,
    REPO_OPTION,
    SEARCH_TYPE_OPTION,
    SINCE_OPTION,
    STATES_OPTION,
    TEMPLATE_DIR_OPTION,
    TITLE_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    """Send debug logs to stderr when --verbose is given."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )


def build_pickers(token: str | None, config_file: Path | None) -> Pickers:
    """Create pickers from CLI options, exiting on configuration errors."""
    try:
        config = load_config(config_file)
        client = GitHubClient(token=token, host=config.github_host)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)
    return Pickers(client, RichPicker(console), config, Reporter(console))


def collect_filters(**values: str | list[str] | None) -> dict[str, str | list[str]]:
    """Drop unset filter options."""
    return {key: value for key, value in values.items() if value}


def _upper(value: str | None) -> str | None:
    return value.upper() if value else None


def split_values(values: list[str] | None) -> list[str] | None:
    """Flatten repeated and comma-separated option values.

    Example:
        >>> split_values(["bug,docs", "triage"])
        ['bug', 'docs', 'triage']
    """
    if not values:
        return None
    flattened = [part.strip() for value in values for part in value.split(",")]
    return [part for part in flattened if part] or None


def issues(
    repo: str | None = REPO_OPTION,
    states: str | None = STATES_OPTION,
    labels: list[str] | None = LABELS_OPTION,
    assignee: str | None = ASSIGNEE_OPTION,
    created_by: str | None = CREATED_BY_OPTION,
    mentioned: str | None = MENTIONED_OPTION,
    milestone: str | None = MILESTONE_OPTION,
    since: str | None = SINCE_OPTION,
    title: str | None = TITLE_OPTION,
    token: str | None = TOKEN_OPTION,
    config_file: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Pick an issue of a repository.

    Examples:
        gh-picker issues --repo octo-org/hello --labels bug
        gh-picker issues --states OPEN,CLOSED --assignee octocat
    """
    configure_logging(verbose)
    filters = collect_filters(
        states=_upper(states),
        labels=split_values(labels),
        assignee=assignee,
        createdBy=created_by,
        mentioned=mentioned,
        milestone=milestone,
        since=since,
    )
    pickers = build_pickers(token, config_file)
    asyncio.run(pickers.issues(PickerOptions(repo=repo, title=title, filters=filters)))


def prs(
    repo: str | None = REPO_OPTION,
    states: str | None = STATES_OPTION,
    labels: list[str] | None = LABELS_OPTION,
    base: str | None = BASE_OPTION,
    head: str | None = HEAD_OPTION,
    title: str | None = TITLE_OPTION,
    token: str | None = TOKEN_OPTION,
    config_file: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Pick a pull request of a repository.

    Examples:
        gh-picker prs --repo octo-org/hello --states OPEN,MERGED
        gh-picker prs --base main --labels dependencies
    """
    configure_logging(verbose)
    filters = collect_filters(
        states=_upper(states),
        labels=split_values(labels),
        baseRefName=base,
        headRefName=head,
    )
    pickers = build_pickers(token, config_file)
    asyncio.run(
        pickers.pull_requests(PickerOptions(repo=repo, title=title, filters=filters))
    )


def notifications(
    repo: str | None = REPO_OPTION,
    token: str | None = TOKEN_OPTION,
    config_file: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Pick a notification; without --repo all notifications are listed."""
    configure_logging(verbose)
    pickers = build_pickers(token, config_file)
    asyncio.run(pickers.notifications(PickerOptions(repo=repo)))


def search(
    prompts: list[str] = typer.Argument(..., help="Search queries"),
    search_type: str = SEARCH_TYPE_OPTION,
    title: str | None = TITLE_OPTION,
    token: str | None = TOKEN_OPTION,
    config_file: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Search GitHub and pick a result.

    Examples:
        gh-picker search "repo:octo-org/hello is:open bug"
        gh-picker search "label:docs" "label:typo" --type DISCUSSION
    """
    configure_logging(verbose)
    pickers = build_pickers(token, config_file)
    options = PickerOptions(prompt=prompts, search_type=search_type, title=title)
    asyncio.run(pickers.search(options))


def templates(
    directory: Path = TEMPLATE_DIR_OPTION,
    token: str | None = TOKEN_OPTION,
    config_file: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Pick an issue template and print its body."""
    configure_logging(verbose)
    pickers = build_pickers(token, config_file)

    def print_template(template: Mapping) -> None:
        console.print(template.get("body") or "", markup=False)

    asyncio.run(pickers.issue_templates(load_templates(directory), print_template))
