"""Picker actions and key bindings.

A picker's action table starts from the built-in actions of its list kind.
User-defined custom actions are layered on top, then global key remaps, so a
remap always wins over a custom action claiming the same key chord.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .config import CustomAction, PickerConfig
from .git import checkout_pull_request
from .github_client.models import PickableItem
from .navigation import Navigator
from .reporting import Reporter

if TYPE_CHECKING:
    from .github_client.client import GitHubClient
    from .presentation.session import PickerHandle

logger = logging.getLogger(__name__)

Action = Callable[["PickerHandle", PickableItem], Awaitable[Any] | None]

INPUT_MODES = ("n", "i")


@dataclass(frozen=True)
class KeyBinding:
    """Binds a key chord to an action name in the given input modes."""

    action: str
    modes: tuple[str, ...] = INPUT_MODES


@dataclass(frozen=True)
class PickerBindings:
    """Action table and key bindings of one picker session."""

    actions: Mapping[str, Action] = field(default_factory=dict)
    keys: Mapping[str, KeyBinding] = field(default_factory=dict)

    def with_custom_actions(
        self, custom_actions: Mapping[str, CustomAction]
    ) -> "PickerBindings":
        """Register custom actions that define both a key chord and a callback."""
        actions = dict(self.actions)
        keys = dict(self.keys)
        for name, definition in custom_actions.items():
            if not definition.lhs or definition.action is None:
                logger.debug(f"Ignoring custom action '{name}': missing lhs or action")
                continue
            keys[definition.lhs] = KeyBinding(name)
            actions[name] = definition.action
        return PickerBindings(actions=actions, keys=keys)

    def with_remaps(
        self, remaps: Mapping[str, str | None], applicable: Iterable[str]
    ) -> "PickerBindings":
        """Bind global remaps for the applicable action names.

        Remaps overwrite any existing binding of the same key chord.
        """
        applicable = set(applicable)
        keys = dict(self.keys)
        for name, lhs in remaps.items():
            if name in applicable and lhs:
                keys[lhs] = KeyBinding(name)
        return PickerBindings(actions=dict(self.actions), keys=keys)


def build_picker_bindings(
    builtin_actions: Mapping[str, Action],
    config: PickerConfig,
    remaps: Mapping[str, str | None] | None = None,
) -> PickerBindings:
    """Merge built-in actions with the user's custom actions and key remaps.

    Args:
        builtin_actions: Actions of the current list kind. Not modified.
        config: Configuration providing the custom actions
        remaps: Action name to key chord, applied last and only for names
            found in ``builtin_actions``

    Returns:
        PickerBindings with the final action table and key bindings
    """
    base = PickerBindings(actions=dict(builtin_actions), keys={})
    return base.with_custom_actions(config.custom_actions).with_remaps(
        remaps or {}, builtin_actions.keys()
    )


def open_in_browser_action(navigator: Navigator, reporter: Reporter) -> Action:
    """Open the selected issue, pull request or discussion in the browser."""

    def open_in_browser(picker: "PickerHandle", item: PickableItem) -> None:
        if not item.navigable or item.repo is None or item.number is None:
            reporter.error(f"Cannot open {item.display_text} in a browser")
            return
        error = navigator.open_in_browser(item.kind, item.repo, item.number)
        if error:
            reporter.error(error)

    return open_in_browser


def copy_url_action(navigator: Navigator, reporter: Reporter) -> Action:
    """Copy the selected item's web URL to the clipboard."""

    def copy_url(picker: "PickerHandle", item: PickableItem) -> None:
        if not item.url:
            reporter.error(f"No URL available for {item.display_text}")
            return
        error = navigator.copy_url(item.url)
        if error:
            reporter.error(error)
        else:
            reporter.info(f"Copied {item.url}")

    return copy_url


def checkout_pr_action(reporter: Reporter) -> Action:
    """Check out the selected pull request in the local repository."""

    def checkout_pr(picker: "PickerHandle", item: PickableItem) -> None:
        if item.number is None:
            return
        error = checkout_pull_request(item.number)
        if error:
            reporter.error(error)
            return
        reporter.info(f"Checked out pull request #{item.number}")
        picker.close()

    return checkout_pr


def merge_pr_action(client: "GitHubClient", reporter: Reporter) -> Action:
    """Merge the selected pull request."""

    async def merge_pr(picker: "PickerHandle", item: PickableItem) -> None:
        if item.number is None or item.repo is None:
            return
        error = await client.merge_pull_request(item.repo, item.number)
        if error:
            reporter.error(error)
        else:
            reporter.info(f"Merged pull request #{item.number}")

    return merge_pr


def confirm_template_action(callback: Callable[[dict], Any] | None) -> Action:
    """Hand the selected template back to the caller and close the picker."""

    def confirm(picker: "PickerHandle", item: PickableItem) -> None:
        picker.close()
        if callable(callback):
            callback(item.raw)

    return confirm
