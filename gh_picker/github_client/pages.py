"""Aggregation of paginated API responses into a single payload."""

import copy
import json
import logging
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)


class MalformedPageError(ValueError):
    """Raised when a response page cannot be decoded."""

    def __init__(self, page_index: int, reason: str):
        self.page_index = page_index
        super().__init__(f"Malformed response page {page_index}: {reason}")


def _split_path(path: str) -> list[str]:
    return [part for part in path.split(".") if part]


def get_path(payload: Any, path: str) -> Any:
    """Resolve a dotted path, returning None when any segment is missing."""
    current = payload
    for part in _split_path(path):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def set_path(payload: dict[str, Any], path: str, value: Any) -> None:
    """Set a dotted path, creating (or replacing) intermediate objects."""
    parts = _split_path(path)
    current = payload
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[parts[-1]] = value


def decode_page(index: int, page: str | bytes | dict | list) -> Any:
    """Decode one raw page, naming the page index on failure."""
    if isinstance(page, (dict, list)):
        return page
    try:
        decoded = json.loads(page)
    except (TypeError, ValueError) as e:
        raise MalformedPageError(index, str(e)) from e
    if not isinstance(decoded, (dict, list)):
        raise MalformedPageError(index, "not a JSON object or array")
    return decoded


class PageAggregationState:
    """Accumulates nodes across pages and remembers the last envelope."""

    def __init__(self, path: str):
        self.path = path
        self.nodes: list[Any] = []
        self.envelope: Any = None

    def add_page(self, payload: Any) -> None:
        """Append the nodes of one decoded page."""
        self.envelope = payload
        nodes = payload if not self.path else get_path(payload, self.path)
        if isinstance(nodes, list):
            self.nodes.extend(nodes)

    def result(self) -> Any:
        """Build the merged payload shaped like the last page."""
        if not self.path:
            return list(self.nodes)
        envelope = self.envelope if isinstance(self.envelope, dict) else {}
        merged = copy.deepcopy(envelope)
        set_path(merged, self.path, list(self.nodes))
        return merged


def aggregate_pages(pages: Sequence[str | bytes | dict | list], path: str) -> Any:
    """Merge response pages into one payload.

    Args:
        pages: Raw page payloads in arrival order
        path: Dotted path of the node list inside each page, for example
            ``data.repository.issues.nodes``. An empty path means every page
            is itself a list of nodes.

    Returns:
        The last page's envelope with the node list replaced by every page's
        nodes concatenated in order (a plain list for an empty path).

    Raises:
        MalformedPageError: If a page is not a JSON object or array
    """
    state = PageAggregationState(path)
    for index, page in enumerate(pages):
        state.add_page(decode_page(index, page))
    logger.debug(f"Aggregated {len(state.nodes)} nodes from {len(pages)} pages")
    return state.result()
