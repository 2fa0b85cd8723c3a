"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .pick import issues, notifications, prs, search, templates

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-picker",
    help="Pick GitHub issues, pull requests and notifications from the terminal",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


# All commands including main command support -h shorthand via context_settings


app.command(name="issues", context_settings={"help_option_names": ["-h", "--help"]})(
    issues
)
app.command(name="prs", context_settings={"help_option_names": ["-h", "--help"]})(
    prs
)
app.command(
    name="notifications", context_settings={"help_option_names": ["-h", "--help"]}
)(notifications)
app.command(name="search", context_settings={"help_option_names": ["-h", "--help"]})(
    search
)
app.command(
    name="templates", context_settings={"help_option_names": ["-h", "--help"]}
)(templates)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_picker import __version__

    console.print(f"gh-picker v{__version__}")


if __name__ == "__main__":
    app()
