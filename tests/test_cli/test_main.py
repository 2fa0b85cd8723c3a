"""Tests for CLI commands."""

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from gh_picker.cli.main import app
from gh_picker.cli.pick import split_values
from gh_picker.config import PickerConfig

runner = CliRunner()


class TestVersionCommand:
    """Test version command."""

    def test_version(self) -> None:
        """Test that the version is printed."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "gh-picker v" in result.stdout


class TestPickerCommands:
    """Test commands opening pickers."""

    @patch("gh_picker.cli.pick.load_config", return_value=PickerConfig())
    @patch("gh_picker.cli.pick.GitHubClient")
    @patch("gh_picker.cli.pick.Pickers")
    def test_issues_filters(self, mock_pickers, mock_client, mock_config) -> None:
        """Test that issue options become picker filters."""
        mock_pickers.return_value.issues = AsyncMock(return_value=None)

        result = runner.invoke(
            app,
            [
                "issues",
                "--repo",
                "octo-org/hello",
                "--states",
                "open,closed",
                "-l",
                "bug",
                "-l",
                "docs",
                "--created-by",
                "octocat",
            ],
        )

        assert result.exit_code == 0
        options = mock_pickers.return_value.issues.call_args[0][0]
        assert options.repo == "octo-org/hello"
        assert options.filters == {
            "states": "OPEN,CLOSED",
            "labels": ["bug", "docs"],
            "createdBy": "octocat",
        }

    @patch("gh_picker.cli.pick.load_config", return_value=PickerConfig())
    @patch("gh_picker.cli.pick.GitHubClient")
    @patch("gh_picker.cli.pick.Pickers")
    def test_comma_separated_labels(
        self, mock_pickers, mock_client, mock_config
    ) -> None:
        """Test that comma-separated labels are split into single labels."""
        mock_pickers.return_value.pull_requests = AsyncMock(return_value=None)

        result = runner.invoke(
            app,
            ["prs", "--repo", "octo-org/hello", "--labels", "bug,docs", "-l", "triage"],
        )

        assert result.exit_code == 0
        options = mock_pickers.return_value.pull_requests.call_args[0][0]
        assert options.filters == {"labels": ["bug", "docs", "triage"]}

    @patch("gh_picker.cli.pick.load_config", return_value=PickerConfig())
    @patch("gh_picker.cli.pick.GitHubClient")
    @patch("gh_picker.cli.pick.Pickers")
    def test_prs_branches(self, mock_pickers, mock_client, mock_config) -> None:
        """Test that branch options become pull request filters."""
        mock_pickers.return_value.pull_requests = AsyncMock(return_value=None)

        result = runner.invoke(app, ["prs", "--base", "main", "--head", "fix"])

        assert result.exit_code == 0
        options = mock_pickers.return_value.pull_requests.call_args[0][0]
        assert options.filters == {"baseRefName": "main", "headRefName": "fix"}

    @patch("gh_picker.cli.pick.load_config", return_value=PickerConfig())
    @patch("gh_picker.cli.pick.GitHubClient")
    @patch("gh_picker.cli.pick.Pickers")
    def test_search_prompts(self, mock_pickers, mock_client, mock_config) -> None:
        """Test that every argument becomes a search prompt."""
        mock_pickers.return_value.search = AsyncMock(return_value=None)

        result = runner.invoke(app, ["search", "is:open bug", "label:typo"])

        assert result.exit_code == 0
        options = mock_pickers.return_value.search.call_args[0][0]
        assert options.prompt == ["is:open bug", "label:typo"]
        assert options.search_type == "ISSUE"

    @patch("gh_picker.cli.pick.load_config", return_value=PickerConfig())
    @patch("gh_picker.cli.pick.GitHubClient")
    @patch("gh_picker.cli.pick.Pickers")
    def test_templates(
        self, mock_pickers, mock_client, mock_config, tmp_path
    ) -> None:
        """Test that templates are loaded from the given directory."""
        (tmp_path / "bug.md").write_text("---\nname: Bug\n---\nSteps\n")
        mock_pickers.return_value.issue_templates = AsyncMock(return_value=None)

        result = runner.invoke(app, ["templates", "--dir", str(tmp_path)])

        assert result.exit_code == 0
        templates = mock_pickers.return_value.issue_templates.call_args[0][0]
        assert [t["name"] for t in templates] == ["Bug"]

    @patch("gh_picker.cli.pick.load_config", return_value=PickerConfig())
    @patch(
        "gh_picker.cli.pick.GitHubClient",
        side_effect=ValueError("GitHub token is required."),
    )
    def test_missing_token(self, mock_client, mock_config) -> None:
        """Test that a missing token exits with an error."""
        result = runner.invoke(app, ["notifications"])

        assert result.exit_code == 1
        assert "GitHub token is required." in result.stdout

    @patch(
        "gh_picker.cli.pick.load_config",
        side_effect=ValueError("Invalid YAML in config.yaml"),
    )
    def test_invalid_config(self, mock_config) -> None:
        """Test that configuration errors exit with an error."""
        result = runner.invoke(app, ["issues", "--repo", "octo-org/hello"])

        assert result.exit_code == 1
        assert "Invalid YAML" in result.stdout


class TestSplitValues:
    """Test split_values function."""

    def test_flattens_comma_separated_values(self) -> None:
        """Test flattening repeated and comma-separated values."""
        assert split_values(["bug, docs", "triage"]) == ["bug", "docs", "triage"]

    def test_empty_values(self) -> None:
        """Test that missing or blank values give None."""
        assert split_values(None) is None
        assert split_values([",", " "]) is None
