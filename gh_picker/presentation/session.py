"""Session descriptor handed to the presentation layer."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from ..actions import Action, KeyBinding, PickerBindings
from ..github_client.models import PickableItem

# (text, style) pairs; a None style renders with the default style
Segment = tuple[str, str | None]
FormatFn = Callable[[PickableItem], list[Segment]]
PreviewFn = Callable[[PickableItem], list[str]]


@dataclass(frozen=True)
class SessionDescriptor:
    """Everything a presenter needs to run one picker session."""

    title: str
    items: tuple[PickableItem, ...]
    format: FormatFn
    keys: Mapping[str, KeyBinding]
    actions: Mapping[str, Action]
    preview: PreviewFn | None = None

    @classmethod
    def create(
        cls,
        title: str,
        items: list[PickableItem],
        format: FormatFn,
        bindings: PickerBindings,
        preview: PreviewFn | None = None,
    ) -> "SessionDescriptor":
        """Build a descriptor with read-only copies of the tables."""
        return cls(
            title=title,
            items=tuple(items),
            format=format,
            keys=MappingProxyType(dict(bindings.keys)),
            actions=MappingProxyType(dict(bindings.actions)),
            preview=preview,
        )


class PickerHandle:
    """Handle passed to actions to control the running picker."""

    def __init__(self, session: SessionDescriptor):
        self.session = session
        self.closed = False

    def close(self) -> None:
        """Close the picker once the current action returns."""
        self.closed = True


class Presenter(Protocol):
    """Renders a session and dispatches the operator's chosen actions."""

    async def pick(self, session: SessionDescriptor) -> None: ...
