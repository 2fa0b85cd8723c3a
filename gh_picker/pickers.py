"""Picker sessions for issues, pull requests, notifications, search and templates.

Every session follows the same pipeline: resolve options, build the filter,
fetch and aggregate all pages, normalize the nodes, compose the action and
key tables, then hand a single session descriptor to the presenter. Empty
results end the session with an informational message; remote failures end
it with an error message.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .actions import (
    Action,
    build_picker_bindings,
    checkout_pr_action,
    confirm_template_action,
    copy_url_action,
    merge_pr_action,
    open_in_browser_action,
)
from .config import ListConfig, PickerConfig
from .git import get_remote_name, split_repo
from .github_client.client import GitHubClient
from .github_client.filters import build_filter
from .github_client.models import FetchResult, PickableItem
from .github_client.pages import MalformedPageError, aggregate_pages, get_path
from .github_client.queries import render_query
from .navigation import Navigator
from .normalize import (
    max_number,
    normalize_nodes,
    normalize_notifications,
    normalize_templates,
)
from .presentation.formatting import (
    format_notification,
    format_template,
    issue_formatter,
    preview_template,
    search_formatter,
)
from .presentation.session import PickerHandle, Presenter, SessionDescriptor
from .reporting import Reporter

logger = logging.getLogger(__name__)

ISSUES_PATH = "data.repository.issues.nodes"
PULL_REQUESTS_PATH = "data.repository.pullRequests.nodes"
SEARCH_PATH = "data.search.nodes"

SEARCH_TYPES = ("ISSUE", "DISCUSSION", "REPOSITORY")

# Picker names without an implementation yet
NOT_IMPLEMENTED_PICKERS = (
    "actions",
    "assigned_labels",
    "assignees",
    "changed_files",
    "commits",
    "discussions",
    "gists",
    "labels",
    "milestones",
    "pending_threads",
    "project_cards",
    "project_cards_v2",
    "project_columns",
    "project_columns_v2",
    "repos",
    "review_commits",
    "users",
    "workflow_runs",
)


class PickerOptions(BaseModel):
    """Options of a picker session."""

    repo: str | None = Field(None, description="Repository as owner/name")
    title: str | None = Field(None, description="Picker title")
    filters: dict[str, str | list[str]] = Field(
        default_factory=dict, description="Filter options keyed by GraphQL argument"
    )
    prompt: list[str] = Field(default_factory=list, description="Search queries")
    search_type: str = Field("ISSUE", description="ISSUE, DISCUSSION or REPOSITORY")

    @field_validator("prompt", mode="before")
    @classmethod
    def _single_prompt(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class Pickers:
    """Runs picker sessions against GitHub."""

    def __init__(
        self,
        client: GitHubClient,
        presenter: Presenter,
        config: PickerConfig | None = None,
        reporter: Reporter | None = None,
        navigator: Navigator | None = None,
    ):
        """Initialize pickers with their collaborators.

        Args:
            client: GitHub client used for fetches and mutations
            presenter: Presentation layer receiving the session descriptors
            config: Read-only configuration snapshot
            reporter: Informational and error message sink
            navigator: Browser and clipboard helpers
        """
        self.client = client
        self.presenter = presenter
        self.config = config or PickerConfig()
        self.reporter = reporter or Reporter()
        self.navigator = navigator or Navigator(self.config.github_host)

    def picker_for(self, name: str) -> Callable[..., Awaitable[Any]]:
        """Look up a picker by name.

        Raises:
            KeyError: If no picker has that name
        """
        pickers = {
            "issues": self.issues,
            "prs": self.pull_requests,
            "notifications": self.notifications,
            "search": self.search,
            "issue_templates": self.issue_templates,
        }
        if name in pickers:
            return pickers[name]
        if name in NOT_IMPLEMENTED_PICKERS:
            return self.not_implemented
        raise KeyError(name)

    async def not_implemented(self, *args: Any, **kwargs: Any) -> None:
        self.reporter.error("Not implemented yet")

    def _resolve_repo(self, options: PickerOptions) -> tuple[str, str] | None:
        """Fill in the repository from the git remote when none is given."""
        if not options.repo or not options.repo.strip():
            options.repo = get_remote_name()
        if not options.repo:
            self.reporter.error("Cannot find repo")
            return None
        try:
            return split_repo(options.repo)
        except ValueError as e:
            self.reporter.error(str(e))
            return None

    async def _fetch(self, fetch: Awaitable[FetchResult], path: str) -> Any | None:
        """Await one fetch and aggregate its pages; None after reporting a failure."""
        result = await fetch
        if not result.ok:
            self.reporter.error(result.error or "Unknown error")
            return None
        try:
            return aggregate_pages(result.pages, path)
        except MalformedPageError as e:
            self.reporter.error(str(e))
            return None

    def _navigation_actions(self) -> dict[str, Action]:
        return {
            "open_in_browser": open_in_browser_action(self.navigator, self.reporter),
            "copy_url": copy_url_action(self.navigator, self.reporter),
        }

    async def _present(
        self,
        title: str,
        items: list[PickableItem],
        format: Callable[[PickableItem], list],
        builtin_actions: dict[str, Action],
        remaps: dict[str, str | None] | None = None,
        preview: Callable[[PickableItem], list[str]] | None = None,
    ) -> SessionDescriptor:
        bindings = build_picker_bindings(builtin_actions, self.config, remaps)
        session = SessionDescriptor.create(
            title, items, format, bindings, preview=preview
        )
        logger.debug(f"Presenting {len(items)} items: {title}")
        await self.presenter.pick(session)
        return session

    async def _repository_objects(
        self,
        options: PickerOptions | None,
        kind: str,
        noun: str,
        query_name: str,
        path: str,
        list_config: ListConfig,
    ) -> tuple[PickerOptions, list[PickableItem]] | None:
        """Fetch and normalize the issues or pull requests of a repository."""
        options = (options or PickerOptions()).model_copy(deep=True)
        options.filters.setdefault("states", "OPEN")

        filter_expression = build_filter(options.filters, kind)
        repository = self._resolve_repo(options)
        if repository is None:
            return None
        owner, name = repository

        order_by = list_config.order_by
        query = render_query(
            query_name,
            owner,
            name,
            filter_expression,
            order_by.field,
            order_by.direction,
            escape=False,
        )
        self.reporter.info(f"Fetching {noun} (this may take a while) ...")
        payload = await self._fetch(self.client.graphql(query, paginate=True), path)
        if payload is None:
            return None

        items = normalize_nodes(get_path(payload, path) or [])
        if not items:
            self.reporter.info(f"There are no matching {noun} in {options.repo}.")
            return None
        return options, items

    async def issues(
        self, options: PickerOptions | None = None
    ) -> SessionDescriptor | None:
        """List the issues of a repository."""
        fetched = await self._repository_objects(
            options, "issue", "issues", "issues_query", ISSUES_PATH, self.config.issues
        )
        if fetched is None:
            return None
        options, items = fetched

        return await self._present(
            options.title or f"Issues in {options.repo}",
            items,
            issue_formatter(max_number(items)),
            self._navigation_actions(),
        )

    async def pull_requests(
        self, options: PickerOptions | None = None
    ) -> SessionDescriptor | None:
        """List the pull requests of a repository."""
        fetched = await self._repository_objects(
            options,
            "pull_request",
            "pull requests",
            "pull_requests_query",
            PULL_REQUESTS_PATH,
            self.config.pull_requests,
        )
        if fetched is None:
            return None
        options, items = fetched

        actions = self._navigation_actions()
        actions["checkout_pr"] = checkout_pr_action(self.reporter)
        actions["merge_pr"] = merge_pr_action(self.client, self.reporter)
        return await self._present(
            options.title or f"Pull requests in {options.repo}",
            items,
            issue_formatter(max_number(items)),
            actions,
        )

    async def notifications(
        self, options: PickerOptions | None = None
    ) -> SessionDescriptor | None:
        """List notification threads, for one repository or for the user.

        Marking a notification as read re-runs this whole session to refresh
        the list.
        """
        options = (options or PickerOptions()).model_copy(deep=True)

        endpoint = "/notifications"
        title = "GitHub Notifications"
        if options.repo:
            try:
                owner, name = split_repo(options.repo)
            except ValueError as e:
                self.reporter.error(str(e))
                return None
            endpoint = f"/repos/{owner}/{name}/notifications"
            title = f"{options.repo} Notifications"

        payload = await self._fetch(self.client.rest(endpoint), "")
        if payload is None:
            return None

        items = normalize_notifications(payload, self.config.github_host)
        if not items:
            self.reporter.info("There are no notifications")
            return None

        async def mark_notification_read(
            picker: PickerHandle, item: PickableItem
        ) -> None:
            if item.thread_id:
                error = await self.client.mark_notification_read(item.thread_id)
                if error:
                    self.reporter.error(error)
            picker.close()
            await self.notifications(options)

        actions = self._navigation_actions()
        actions["mark_notification_read"] = mark_notification_read
        remaps = {"mark_notification_read": self.config.mappings.notification.read.lhs}
        return await self._present(
            options.title or title, items, format_notification, actions, remaps
        )

    async def search(
        self, options: PickerOptions | None = None
    ) -> SessionDescriptor | None:
        """Search issues, pull requests or discussions for one or more queries.

        Queries run in order; results are collected across all of them before
        a single picker is shown.
        """
        options = (options or PickerOptions()).model_copy(deep=True)
        search_type = (options.search_type or "ISSUE").upper()
        if search_type == "REPOSITORY":
            await self.not_implemented()
            return None
        if search_type not in SEARCH_TYPES:
            self.reporter.error(f"Unsupported search type: {options.search_type}")
            return None

        items: list[PickableItem] = []
        for prompt in options.prompt:
            query = render_query("search_query", prompt, search_type)
            payload = await self._fetch(self.client.graphql(query), SEARCH_PATH)
            if payload is None:
                return None
            results = normalize_nodes(get_path(payload, SEARCH_PATH) or [])
            if not results:
                self.reporter.info(f"No results found for query: {prompt}")
            items.extend(results)

        if not items:
            self.reporter.info("No search results found")
            return None

        return await self._present(
            options.title or "GitHub Search Results",
            items,
            search_formatter(max_number(items)),
            self._navigation_actions(),
        )

    async def issue_templates(
        self,
        templates: list[dict | None] | None,
        callback: Callable[[dict], Any] | None = None,
    ) -> SessionDescriptor | None:
        """Pick one of the given issue templates.

        Args:
            templates: Templates supplied by the caller; null and empty
                entries are skipped
            callback: Called with the chosen template
        """
        items = normalize_templates(templates or [])
        if not items:
            self.reporter.info("No templates found")
            return None

        return await self._present(
            "Issue templates",
            items,
            format_template,
            {"confirm": confirm_template_action(callback)},
            preview=preview_template,
        )
