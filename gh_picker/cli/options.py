"""Standardized CLI option definitions for consistent shorthand mappings.

This module provides centralized option definitions to ensure consistent
shorthand options across all commands.
"""

from pathlib import Path

import typer

# Core options - used across most commands
REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="GitHub repository as owner/name (defaults to the git remote)",
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (defaults to $GH_PICKER_CONFIG or "
    "~/.config/gh-picker/config.yaml)",
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

TITLE_OPTION = typer.Option(None, "--title", help="Picker title")

# Filter options - used for filtering operations
STATES_OPTION = typer.Option(
    None, "--states", "-s", help="States, comma-separated (e.g. OPEN,CLOSED)"
)

LABELS_OPTION = typer.Option(
    None, "--labels", "-l", help="Filter by labels (repeatable or comma-separated)"
)

ASSIGNEE_OPTION = typer.Option(None, "--assignee", help="Filter by assignee login")

CREATED_BY_OPTION = typer.Option(None, "--created-by", help="Filter by author login")

MENTIONED_OPTION = typer.Option(None, "--mentioned", help="Filter by mentioned login")

MILESTONE_OPTION = typer.Option(None, "--milestone", help="Filter by milestone number")

SINCE_OPTION = typer.Option(
    None, "--since", help="Only issues updated after this ISO 8601 timestamp"
)

BASE_OPTION = typer.Option(None, "--base", help="Filter by base branch name")

HEAD_OPTION = typer.Option(None, "--head", help="Filter by head branch name")

# Search options
SEARCH_TYPE_OPTION = typer.Option(
    "ISSUE", "--type", help="Search type: ISSUE, DISCUSSION or REPOSITORY"
)

# Template options
TEMPLATE_DIR_OPTION = typer.Option(
    Path(".github/ISSUE_TEMPLATE"), "--dir", "-d", help="Issue template directory"
)
