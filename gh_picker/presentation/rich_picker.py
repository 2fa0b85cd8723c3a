"""Terminal picker built on rich tables and prompts."""

import inspect
import logging

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from ..github_client.models import PickableItem
from .session import PickerHandle, SessionDescriptor

logger = logging.getLogger(__name__)

QUIT_CHOICES = ("q", "quit")


class RichPicker:
    """Interactive picker: lists items, then asks for an item and an action.

    Actions are chosen by key chord or by action name. The picker loops until
    the operator quits or an action closes it.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render(self, session: SessionDescriptor) -> Group:
        """Render the session title above a numbered table of its items."""
        table = Table(show_header=False, box=None)
        table.add_column("Index", style="bold", justify="right")
        table.add_column("Item")
        for index, item in enumerate(session.items, 1):
            text = Text()
            for content, style in session.format(item):
                text.append(content, style=style or "")
            table.add_row(str(index), text)
        if not session.title:
            return Group(table)
        return Group(Text(session.title, style="bold"), table)

    def describe_bindings(self, session: SessionDescriptor) -> str:
        """One line listing the bound keys and the available actions."""
        keys = ", ".join(
            f"{chord} → {binding.action}" for chord, binding in session.keys.items()
        )
        actions = ", ".join(session.actions)
        line = f"Actions: {actions}"
        if keys:
            line += f" | Keys: {keys}"
        return line

    def resolve_action(self, session: SessionDescriptor, choice: str) -> str | None:
        """Map a key chord or action name to an action name."""
        binding = session.keys.get(choice)
        if binding is not None:
            return binding.action
        if choice in session.actions:
            return choice
        return None

    def _select_item(self, session: SessionDescriptor) -> PickableItem | None:
        while True:
            choice = Prompt.ask("Select item (q to quit)", console=self.console)
            choice = (choice or "").strip()
            if choice.lower() in QUIT_CHOICES:
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(session.items):
                return session.items[int(choice) - 1]
            self.console.print(f"[yellow]Invalid selection: {escape(choice)}[/yellow]")

    async def pick(self, session: SessionDescriptor) -> None:
        """Run the session until the operator quits or an action closes it."""
        handle = PickerHandle(session)
        default_action = "confirm" if "confirm" in session.actions else None

        while not handle.closed:
            self.console.print(self.render(session))
            self.console.print(f"[dim]{self.describe_bindings(session)}[/dim]")

            item = self._select_item(session)
            if item is None:
                return

            if session.preview is not None:
                self.console.print(
                    Panel(
                        Text("\n".join(session.preview(item))),
                        title=escape(item.title),
                    )
                )

            if default_action:
                choice = Prompt.ask(
                    "Action (key or name)", console=self.console, default=default_action
                )
            else:
                choice = Prompt.ask("Action (key or name)", console=self.console)
            choice = (choice or "").strip()
            action_name = self.resolve_action(session, choice)
            if action_name is None:
                self.console.print(f"[yellow]Unknown action: {escape(choice)}[/yellow]")
                continue

            logger.debug(f"Running action {action_name} on {item.handle}")
            result = session.actions[action_name](handle, item)
            if inspect.isawaitable(result):
                await result
