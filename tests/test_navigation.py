"""Tests for browser and clipboard navigation."""

import webbrowser
from unittest.mock import patch

import pyperclip
import pytest

from gh_picker.github_client.models import ItemKind
from gh_picker.navigation import Navigator, web_url


class TestWebUrl:
    """Test web_url function."""

    def test_kinds(self) -> None:
        """Test the URL segment of each navigable kind."""
        assert web_url(ItemKind.ISSUE, "a/b", 1) == "https://github.com/a/b/issues/1"
        assert web_url(ItemKind.PULL_REQUEST, "a/b", 2) == (
            "https://github.com/a/b/pull/2"
        )
        assert web_url(ItemKind.DISCUSSION, "a/b", 3, "ghe.example.com") == (
            "https://ghe.example.com/a/b/discussions/3"
        )

    def test_unsupported_kind(self) -> None:
        """Test that templates have no web URL."""
        with pytest.raises(ValueError):
            web_url(ItemKind.TEMPLATE, "a/b", 1)


class TestNavigator:
    """Test Navigator class."""

    @patch("gh_picker.navigation.webbrowser.open", return_value=True)
    def test_open_in_browser(self, mock_open) -> None:
        """Test opening the web URL."""
        assert Navigator().open_in_browser(ItemKind.ISSUE, "a/b", 1) is None
        mock_open.assert_called_once_with("https://github.com/a/b/issues/1")

    @patch(
        "gh_picker.navigation.webbrowser.open",
        side_effect=webbrowser.Error("no browser"),
    )
    def test_open_in_browser_failure(self, mock_open) -> None:
        """Test that browser failures are returned as error text."""
        error = Navigator().open_in_browser(ItemKind.ISSUE, "a/b", 1)

        assert error == "Failed to open https://github.com/a/b/issues/1: no browser"

    @patch("gh_picker.navigation.webbrowser.open", return_value=False)
    def test_open_in_browser_without_browser(self, mock_open) -> None:
        """Test that a missing browser is returned as error text."""
        error = Navigator().open_in_browser(ItemKind.PULL_REQUEST, "a/b", 2)

        assert error == (
            "Failed to open https://github.com/a/b/pull/2: no browser available"
        )

    @patch("gh_picker.navigation.pyperclip.copy")
    def test_copy_url(self, mock_copy) -> None:
        """Test copying a URL to the clipboard."""
        assert Navigator().copy_url("https://github.com/a/b/issues/1") is None
        mock_copy.assert_called_once_with("https://github.com/a/b/issues/1")

    @patch(
        "gh_picker.navigation.pyperclip.copy",
        side_effect=pyperclip.PyperclipException("no clipboard"),
    )
    def test_copy_url_failure(self, mock_copy) -> None:
        """Test that clipboard failures are returned as error text."""
        error = Navigator().copy_url("https://x")

        assert error == "Failed to copy https://x to the clipboard: no clipboard"
