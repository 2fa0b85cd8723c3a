"""User-facing informational and error messages."""

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Reporter:
    """Prints informational and error messages for the operator.

    Messages are printed verbatim (rich markup in them is escaped) and
    mirrored to the log.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def info(self, message: str) -> None:
        """Report a non-fatal informational message."""
        logger.info(message)
        self.console.print(f"[cyan]ℹ️  {escape(message)}[/cyan]")

    def error(self, message: str) -> None:
        """Report a user-visible error."""
        logger.error(message)
        self.console.print(f"[red]❌ {escape(message)}[/red]")
