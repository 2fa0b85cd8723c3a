"""Tests for the rich terminal picker."""

from io import StringIO
from unittest.mock import AsyncMock, Mock, patch

import pytest
from conftest import issue_node
from rich.console import Console

from gh_picker.actions import KeyBinding, PickerBindings
from gh_picker.normalize import normalize_nodes
from gh_picker.presentation.formatting import issue_formatter
from gh_picker.presentation.rich_picker import RichPicker
from gh_picker.presentation.session import SessionDescriptor


def make_session(actions: dict, keys: dict | None = None) -> SessionDescriptor:
    """Build a session with two issues."""
    items = normalize_nodes([issue_node(1, "First"), issue_node(2, "Second")])
    return SessionDescriptor.create(
        "Issues in octo-org/hello",
        items,
        issue_formatter(2),
        PickerBindings(actions=actions, keys=keys or {}),
    )


@pytest.fixture
def console() -> Console:
    """Console writing to a buffer."""
    return Console(file=StringIO(), width=120)


class TestRichPicker:
    """Test RichPicker class."""

    def test_render(self, console: Console) -> None:
        """Test that every item is rendered with its index."""
        picker = RichPicker(console)
        console.print(picker.render(make_session({"noop": Mock()})))

        output = console.file.getvalue()
        assert "Issues in octo-org/hello" in output
        assert "#1" in output and "Second" in output

    def test_render_title_on_one_line(self, console: Console) -> None:
        """Test that a title wider than the items is not wrapped."""
        picker = RichPicker(console)
        console.print(picker.render(make_session({"noop": Mock()})))

        lines = console.file.getvalue().splitlines()
        assert lines[0].strip() == "Issues in octo-org/hello"
        assert "First" in lines[1]

    def test_resolve_action(self) -> None:
        """Test resolving key chords and action names."""
        session = make_session(
            {"copy_url": Mock()}, {"<C-y>": KeyBinding("copy_url")}
        )
        picker = RichPicker()

        assert picker.resolve_action(session, "<C-y>") == "copy_url"
        assert picker.resolve_action(session, "copy_url") == "copy_url"
        assert picker.resolve_action(session, "delete") is None

    @pytest.mark.asyncio
    @patch("gh_picker.presentation.rich_picker.Prompt.ask")
    async def test_runs_action_until_quit(self, mock_ask, console: Console) -> None:
        """Test running an action on the chosen item, then quitting."""
        action = Mock(return_value=None)
        session = make_session({"copy_url": action}, {"gy": KeyBinding("copy_url")})
        mock_ask.side_effect = ["2", "gy", "q"]

        await RichPicker(console).pick(session)

        action.assert_called_once()
        assert action.call_args[0][1].number == 2

    @pytest.mark.asyncio
    @patch("gh_picker.presentation.rich_picker.Prompt.ask")
    async def test_closing_action_ends_session(
        self, mock_ask, console: Console
    ) -> None:
        """Test that an async action closing the picker ends the loop."""

        async def close(picker, item) -> None:
            picker.close()

        action = AsyncMock(side_effect=close)
        session = make_session({"merge_pr": action})
        mock_ask.side_effect = ["1", "merge_pr"]

        await RichPicker(console).pick(session)

        action.assert_awaited_once()
        assert mock_ask.call_count == 2

    @pytest.mark.asyncio
    @patch("gh_picker.presentation.rich_picker.Prompt.ask")
    async def test_invalid_input(self, mock_ask, console: Console) -> None:
        """Test that invalid selections and actions are reported."""
        action = Mock(return_value=None)
        session = make_session({"copy_url": action})
        mock_ask.side_effect = ["9", "1", "explode", "q"]

        await RichPicker(console).pick(session)

        action.assert_not_called()
        output = console.file.getvalue()
        assert "Invalid selection: 9" in output
        assert "Unknown action: explode" in output
