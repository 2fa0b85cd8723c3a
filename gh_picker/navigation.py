"""Opening items in the browser and copying their URLs."""

import logging
import webbrowser

import pyperclip

from .github_client.models import ItemKind

logger = logging.getLogger(__name__)

URL_SEGMENTS = {
    ItemKind.ISSUE: "issues",
    ItemKind.PULL_REQUEST: "pull",
    ItemKind.DISCUSSION: "discussions",
}


def web_url(kind: ItemKind, repo: str, number: int, host: str = "github.com") -> str:
    """Build the web URL of an issue, pull request or discussion.

    Example:
        >>> web_url(ItemKind.PULL_REQUEST, "octo-org/hello", 7)
        'https://github.com/octo-org/hello/pull/7'
    """
    segment = URL_SEGMENTS.get(kind)
    if segment is None:
        raise ValueError(f"Cannot build a web URL for {kind.value} items")
    return f"https://{host}/{repo}/{segment}/{number}"


class Navigator:
    """Side effects triggered by picker actions."""

    def __init__(self, host: str = "github.com"):
        self.host = host

    def open_in_browser(self, kind: ItemKind, repo: str, number: int) -> str | None:
        """Open an item in the default browser.

        Returns:
            None on success, otherwise the error text
        """
        url = web_url(kind, repo, number, self.host)
        try:
            opened = webbrowser.open(url)
        except (webbrowser.Error, OSError) as e:
            logger.warning(f"Failed to open browser for {url}: {e}")
            return f"Failed to open {url}: {e}"
        if not opened:
            return f"Failed to open {url}: no browser available"
        return None

    def copy_url(self, url: str) -> str | None:
        """Copy a URL to the system clipboard.

        Returns:
            None on success, otherwise the error text
        """
        try:
            pyperclip.copy(url)
        except pyperclip.PyperclipException as e:
            return f"Failed to copy {url} to the clipboard: {e}"
        logger.debug(f"Copied {url} to the clipboard")
        return None
