"""Pydantic models for picker items and remote fetch results.

Items wrap raw GitHub GraphQL v4 / REST v3 objects without reshaping them;
the untouched payload is kept in ``raw`` for action callbacks.
API Reference: https://docs.github.com/en/graphql/reference/objects
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ItemKind(str, Enum):
    """Classification of a pickable item."""

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"
    DISCUSSION = "discussion"
    NOTIFICATION = "notification"
    TEMPLATE = "template"
    UNKNOWN = "unknown"


NAVIGABLE_KINDS = frozenset(
    {ItemKind.ISSUE, ItemKind.PULL_REQUEST, ItemKind.DISCUSSION}
)


class PickableItem(BaseModel):
    """Normalized view over one remote object shown in a picker."""

    kind: ItemKind = Field(..., description="Classification of the object")
    number: int | None = Field(
        None, description="Issue, pull request or discussion number"
    )
    display_text: str = Field(..., description="Text used for matching/display")
    handle: str = Field(..., description="Opaque locator used to open the object")
    raw: dict[str, Any] = Field(
        default_factory=dict, description="Original untouched remote object"
    )
    title: str = Field("", description="Title of the object (string)")
    repo: str | None = Field(None, description="Owning repository as owner/name")
    url: str | None = Field(None, description="Web URL of the object, when known")
    status: str | None = Field(
        None, description="Notification read status: 'unread' or 'read'"
    )
    category: str | None = Field(None, description="Discussion category name")
    thread_id: str | None = Field(None, description="Notification thread id")

    @property
    def navigable(self) -> bool:
        """Whether the item can be opened in a browser."""
        return self.kind in NAVIGABLE_KINDS and self.number is not None


class IssueTemplate(BaseModel):
    """Issue template as found under .github/ISSUE_TEMPLATE."""

    name: str = Field(..., description="Template name (string)")
    about: str | None = Field(None, description="Short description of the template")
    title: str | None = Field(None, description="Default issue title")
    labels: list[str] = Field(default_factory=list, description="Default labels")
    body: str | None = Field(None, description="Markdown template body")

    @field_validator("labels", mode="before")
    @classmethod
    def _split_labels(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [label.strip() for label in value.split(",") if label.strip()]
        return value or []


class FetchResult(BaseModel):
    """Outcome of a single remote fetch.

    When ``error`` is set the pages must be ignored by the caller.
    """

    pages: list[str] = Field(
        default_factory=list, description="Raw page payloads in arrival order"
    )
    error: str | None = Field(None, description="Error text reported by the remote")

    @property
    def ok(self) -> bool:
        """True when the fetch completed without an error."""
        return not self.error
