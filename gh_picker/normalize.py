"""Normalization of raw GitHub objects into pickable items."""

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from .github_client.models import ItemKind, PickableItem
from .navigation import web_url

logger = logging.getLogger(__name__)

TRAILING_NUMBER = re.compile(r"(\d+)$")

HANDLE_SEGMENTS = {
    ItemKind.ISSUE: "issue",
    ItemKind.PULL_REQUEST: "pull",
    ItemKind.DISCUSSION: "discussion",
}

# Discriminant (lowercased __typename or notification subject type) to kind
KINDS_BY_TYPENAME = {
    "issue": ItemKind.ISSUE,
    "pullrequest": ItemKind.PULL_REQUEST,
    "discussion": ItemKind.DISCUSSION,
}


def item_handle(kind: ItemKind, repo: str, number: int) -> str:
    """Build the locator used to open an item.

    Example:
        >>> item_handle(ItemKind.ISSUE, "octo-org/hello", 12)
        'gh://octo-org/hello/issue/12'
    """
    return f"gh://{repo}/{HANDLE_SEGMENTS[kind]}/{number}"


def classify(typename: str | None) -> ItemKind:
    """Map a discriminant to an item kind, UNKNOWN when unsupported."""
    if not typename:
        return ItemKind.UNKNOWN
    return KINDS_BY_TYPENAME.get(typename.lower(), ItemKind.UNKNOWN)


def _repo_name(node: dict[str, Any]) -> str | None:
    repository = node.get("repository")
    if isinstance(repository, dict):
        return repository.get("nameWithOwner") or repository.get("full_name")
    return None


def _normalize_issue_like(node: dict[str, Any], kind: ItemKind) -> PickableItem | None:
    number = node.get("number")
    repo = _repo_name(node)
    if not isinstance(number, int) or not repo:
        return None
    title = node.get("title") or ""
    return PickableItem(
        kind=kind,
        number=number,
        display_text=f"#{number} {title}",
        handle=item_handle(kind, repo, number),
        raw=node,
        title=title,
        repo=repo,
        url=node.get("url"),
    )


def _normalize_discussion(
    node: dict[str, Any], kind: ItemKind
) -> PickableItem | None:
    item = _normalize_issue_like(node, kind)
    if item is None:
        return None
    category = node.get("category")
    category_name = category.get("name") if isinstance(category, dict) else None
    display_text = f"{item.title} #{item.number}"
    if category_name:
        display_text += f" [{category_name}]"
    return item.model_copy(
        update={"display_text": display_text, "category": category_name}
    )


NORMALIZERS: dict[
    ItemKind, Callable[[dict[str, Any], ItemKind], PickableItem | None]
] = {
    ItemKind.ISSUE: _normalize_issue_like,
    ItemKind.PULL_REQUEST: _normalize_issue_like,
    ItemKind.DISCUSSION: _normalize_discussion,
}


def normalize_node(node: Any, typename: str | None = None) -> PickableItem | None:
    """Normalize one GraphQL node.

    Args:
        node: Raw node as returned by the API
        typename: Discriminant; defaults to the node's ``__typename``

    Returns:
        PickableItem, or None for unsupported or incomplete nodes
    """
    if not isinstance(node, dict):
        return None
    kind = classify(typename or node.get("__typename"))
    normalizer = NORMALIZERS.get(kind)
    if normalizer is None:
        logger.debug(f"Dropping node of unsupported type {node.get('__typename')}")
        return None
    return normalizer(node, kind)


def normalize_nodes(nodes: Iterable[Any]) -> list[PickableItem]:
    """Normalize GraphQL nodes, dropping the ones that cannot be classified."""
    items = []
    for node in nodes:
        item = normalize_node(node)
        if item is not None:
            items.append(item)
    return items


def normalize_notification(
    notification: Any, host: str = "github.com"
) -> PickableItem | None:
    """Normalize one REST notification thread.

    Only issue and pull request subjects are kept; anything else, or a subject
    without a trailing number in its URL, yields None.
    """
    if not isinstance(notification, dict):
        return None
    subject = notification.get("subject")
    repository = notification.get("repository")
    if not isinstance(subject, dict) or not isinstance(repository, dict):
        return None

    kind = classify(subject.get("type"))
    if kind not in (ItemKind.ISSUE, ItemKind.PULL_REQUEST):
        return None

    match = TRAILING_NUMBER.search(subject.get("url") or "")
    repo = repository.get("full_name")
    if not match or not repo:
        return None

    number = int(match.group(1))
    title = subject.get("title") or ""
    return PickableItem(
        kind=kind,
        number=number,
        display_text=f"#{number} {title}",
        handle=item_handle(kind, repo, number),
        raw=notification,
        title=title,
        repo=repo,
        url=web_url(kind, repo, number, host),
        status="unread" if notification.get("unread") else "read",
        thread_id=str(notification["id"]) if notification.get("id") else None,
    )


def normalize_notifications(
    notifications: Iterable[Any], host: str = "github.com"
) -> list[PickableItem]:
    """Normalize notifications, silently excluding unsupported subjects."""
    items = []
    for notification in notifications:
        item = normalize_notification(notification, host)
        if item is not None:
            items.append(item)
    return items


def normalize_template(template: Any) -> PickableItem | None:
    """Normalize an issue template; None for null or empty entries."""
    if not template or not isinstance(template, dict):
        return None
    name = str(template.get("name") or "")
    about = template.get("about")
    display_text = f"{name} - {about}" if about else name
    return PickableItem(
        kind=ItemKind.TEMPLATE,
        display_text=display_text,
        handle=name,
        raw=template,
        title=name,
    )


def normalize_templates(templates: Iterable[Any]) -> list[PickableItem]:
    """Normalize issue templates, dropping null and empty entries."""
    items = []
    for template in templates:
        item = normalize_template(template)
        if item is not None:
            items.append(item)
    return items


def max_number(items: Iterable[PickableItem]) -> int:
    """Largest item number, -1 when no item has one."""
    numbers = [item.number for item in items if item.number is not None]
    return max(numbers, default=-1)
