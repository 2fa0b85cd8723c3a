"""Format callbacks turning items into styled segments."""

from ..github_client.models import ItemKind, PickableItem
from .session import FormatFn, Segment

ICONS: dict[ItemKind, Segment] = {
    ItemKind.ISSUE: ("◉", "green"),
    ItemKind.PULL_REQUEST: ("⇄", "magenta"),
    ItemKind.DISCUSSION: ("💬", "yellow"),
    ItemKind.TEMPLATE: ("▤", "cyan"),
}

NOTIFICATION_ICONS: dict[str, Segment] = {
    "unread": ("●", "bold blue"),
    "read": ("○", "dim"),
}

NUMBER_STYLE = "dim"
REPO_STYLE = "cyan"
CATEGORY_STYLE = "italic yellow"


def icon_for(item: PickableItem) -> Segment:
    return ICONS.get(item.kind, ("?", "red"))


def number_padding(number: int | None, max_number: int) -> str:
    """Spaces aligning a ``#number`` column to the widest number."""
    width = len(str(max_number)) if max_number >= 0 else 0
    return " " * (width - len(str(number if number is not None else "")) + 1)


def issue_formatter(max_number: int) -> FormatFn:
    """Format issues and pull requests as icon, aligned number and title."""

    def format_item(item: PickableItem) -> list[Segment]:
        return [
            icon_for(item),
            (f" #{item.number}", NUMBER_STYLE),
            (number_padding(item.number, max_number), None),
            (item.title, None),
        ]

    return format_item


def search_formatter(max_number: int) -> FormatFn:
    """Format search results; discussions also show their category."""
    base = issue_formatter(max_number)

    def format_item(item: PickableItem) -> list[Segment]:
        segments = base(item)
        if item.kind == ItemKind.DISCUSSION and item.category:
            segments.append((f" [{item.category}]", CATEGORY_STYLE))
        return segments

    return format_item


def format_notification(item: PickableItem) -> list[Segment]:
    """Format a notification as read status, number, repository and title."""
    return [
        NOTIFICATION_ICONS.get(item.status or "read", NOTIFICATION_ICONS["read"]),
        icon_for(item),
        (f" #{item.number}", NUMBER_STYLE),
        (" ", None),
        (item.repo or "", REPO_STYLE),
        (" ", None),
        (item.title, None),
    ]


def format_template(item: PickableItem) -> list[Segment]:
    """Format an issue template as name and description."""
    segments: list[Segment] = [(item.title, REPO_STYLE)]
    about = item.raw.get("about")
    if about:
        segments.append((" - ", NUMBER_STYLE))
        segments.append((str(about), None))
    return segments


def preview_template(item: PickableItem) -> list[str]:
    """Preview lines of an issue template body."""
    body = item.raw.get("body")
    if not body:
        return ["No template body available"]
    return str(body).split("\n")
