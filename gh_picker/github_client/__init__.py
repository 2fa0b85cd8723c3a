"""GitHub client package for API interaction."""

from .client import GitHubClient
from .filters import build_filter
from .models import FetchResult, IssueTemplate, ItemKind, PickableItem
from .pages import MalformedPageError, aggregate_pages
from .queries import render_query

__all__ = [
    "GitHubClient",
    "FetchResult",
    "IssueTemplate",
    "ItemKind",
    "PickableItem",
    "MalformedPageError",
    "aggregate_pages",
    "build_filter",
    "render_query",
]
