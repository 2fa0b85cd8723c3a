"""GitHub API client: paginated reads over httpx, mutations through PyGitHub."""

import asyncio
import logging
import os
from collections.abc import Callable
from typing import Any

import httpx
from github import Auth, Github
from github.GithubException import (
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)

from .. import __version__
from .models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_HOST = "github.com"


def find_page_info(payload: Any) -> dict[str, Any] | None:
    """Find the first ``pageInfo`` object in a GraphQL response."""
    if isinstance(payload, dict):
        page_info = payload.get("pageInfo")
        if isinstance(page_info, dict):
            return page_info
        for value in payload.values():
            found = find_page_info(value)
            if found is not None:
                return found
    elif isinstance(payload, list):
        for value in payload:
            found = find_page_info(value)
            if found is not None:
                return found
    return None


def _describe_http_error(response: httpx.Response) -> str:
    """Build a user-facing error line from a failed HTTP response."""
    message = response.reason_phrase
    try:
        body = response.json()
        if isinstance(body, dict) and body.get("message"):
            message = body["message"]
    except ValueError:
        pass
    return f"GitHub API error {response.status_code}: {message}"


def _describe_graphql_errors(errors: list[Any]) -> str:
    messages = []
    for error in errors:
        if isinstance(error, dict):
            messages.append(str(error.get("message", error)))
        else:
            messages.append(str(error))
    return "; ".join(messages)


class GitHubClient:
    """GitHub API client with token authentication.

    Remote failures never raise: reads return a ``FetchResult`` carrying the
    error text and mutations return the error text (``None`` on success).
    """

    def __init__(
        self,
        token: str | None = None,
        host: str = DEFAULT_HOST,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            host: GitHub host name, for GitHub Enterprise installations
            transport: Optional httpx transport, used by tests
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.host = host
        if host == DEFAULT_HOST:
            self.api_url = "https://api.github.com"
            self.graphql_url = "https://api.github.com/graphql"
        else:
            self.api_url = f"https://{host}/api/v3"
            self.graphql_url = f"https://{host}/api/graphql"

        self.headers = {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": f"gh-picker/{__version__}",
            "Accept": "application/vnd.github+json",
        }
        self._transport = transport
        self.github = Github(auth=Auth.Token(self.token), base_url=self.api_url)

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self.headers, transport=self._transport, timeout=30.0
        )

    async def graphql(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        paginate: bool = False,
    ) -> FetchResult:
        """Run a GraphQL query, optionally following every page.

        Pagination follows the first ``pageInfo`` found in each response and
        passes its ``endCursor`` back as the ``$endCursor`` variable.

        Args:
            query: GraphQL query text
            variables: Query variables
            paginate: Fetch all pages instead of only the first one

        Returns:
            FetchResult with one raw page per response, or the error text
        """
        variables = dict(variables or {})
        pages: list[str] = []

        async with self._http() as http:
            while True:
                logger.debug(f"POST {self.graphql_url} (page {len(pages) + 1})")
                try:
                    response = await http.post(
                        self.graphql_url,
                        json={"query": query, "variables": variables},
                    )
                except httpx.HTTPError as e:
                    return FetchResult(error=f"GitHub request failed: {e}")

                if response.status_code != 200:
                    return FetchResult(error=_describe_http_error(response))

                pages.append(response.text)
                try:
                    payload = response.json()
                except ValueError:
                    # Leave the undecodable page for the aggregator to report
                    break

                if isinstance(payload, dict) and payload.get("errors"):
                    return FetchResult(
                        error=_describe_graphql_errors(payload["errors"])
                    )

                page_info = find_page_info(payload) if paginate else None
                if not page_info or not page_info.get("hasNextPage"):
                    break
                variables["endCursor"] = page_info.get("endCursor")

        return FetchResult(pages=pages)

    async def rest(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        paginate: bool = True,
    ) -> FetchResult:
        """GET a REST endpoint, following ``Link: rel="next"`` when paginating.

        Args:
            endpoint: Path relative to the API root (e.g. '/notifications')
                or an absolute URL
            headers: Extra request headers
            paginate: Fetch all pages instead of only the first one

        Returns:
            FetchResult with one raw page per response, or the error text
        """
        url: str | None = (
            endpoint if endpoint.startswith("http") else f"{self.api_url}{endpoint}"
        )
        params: dict[str, Any] | None = {"per_page": 100}
        pages: list[str] = []

        async with self._http() as http:
            while url:
                logger.debug(f"GET {url}")
                try:
                    response = await http.get(url, headers=headers, params=params)
                except httpx.HTTPError as e:
                    return FetchResult(error=f"GitHub request failed: {e}")

                if response.status_code != 200:
                    return FetchResult(error=_describe_http_error(response))

                pages.append(response.text)
                # The next link already carries the query string
                params = None
                url = response.links.get("next", {}).get("url") if paginate else None

        return FetchResult(pages=pages)

    async def _run_mutation(
        self, operation: Callable[[], Any], description: str
    ) -> str | None:
        """Run a blocking PyGitHub call in a worker thread.

        Returns:
            None on success, otherwise the error text
        """
        try:
            await asyncio.to_thread(operation)
        except UnknownObjectException:
            return f"Failed to {description}: not found"
        except RateLimitExceededException:
            return f"Failed to {description}: rate limit exceeded"
        except GithubException as e:
            message = e.data.get("message") if isinstance(e.data, dict) else None
            return f"Failed to {description}: {message or e}"
        logger.debug(f"Completed: {description}")
        return None

    async def mark_notification_read(self, thread_id: str) -> str | None:
        """Mark a notification thread as read.

        Args:
            thread_id: Notification thread id

        Returns:
            None on success, otherwise the error text
        """

        def mark() -> None:
            notification = self.github.get_user().get_notification(thread_id)
            notification.mark_as_read()

        return await self._run_mutation(
            mark, f"mark notification {thread_id} as read"
        )

    async def merge_pull_request(self, repo: str, number: int) -> str | None:
        """Merge a pull request with the repository's default merge method.

        Args:
            repo: Repository as owner/name
            number: Pull request number

        Returns:
            None on success, otherwise the error text
        """

        def merge() -> None:
            pull = self.github.get_repo(repo).get_pull(number)
            status = pull.merge()
            if not status.merged:
                raise GithubException(405, {"message": status.message}, None)

        return await self._run_mutation(merge, f"merge pull request #{number}")
