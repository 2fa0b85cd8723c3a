"""Tests for GraphQL query templates."""

import pytest

from gh_picker.github_client.queries import escape_value, render_query


class TestRenderQuery:
    """Test render_query function."""

    def test_issues_query(self) -> None:
        """Test substituting owner, name, filter and ordering."""
        query = render_query(
            "issues_query",
            "octo-org",
            "hello",
            "states:OPEN,",
            "CREATED_AT",
            "DESC",
            escape=False,
        )
        assert 'repository(owner: "octo-org", name: "hello")' in query
        assert "filterBy: {states:OPEN,}" in query
        assert "orderBy: {field: CREATED_AT, direction: DESC}" in query
        assert "$endCursor" in query

    def test_pull_requests_filter_is_inlined(self) -> None:
        """Test that the pull request filter is a plain argument list."""
        query = render_query(
            "pull_requests_query",
            "octo-org",
            "hello",
            'baseRefName:"main",states:OPEN,',
            "CREATED_AT",
            "ASC",
            escape=False,
        )
        assert 'after: $endCursor, baseRefName:"main",states:OPEN, orderBy' in query

    def test_search_query_escapes_prompt(self) -> None:
        """Test that quotes in a search prompt are escaped."""
        query = render_query("search_query", 'label:"good first issue"', "ISSUE")
        assert 'query: "label:\\"good first issue\\""' in query
        assert "type: ISSUE" in query

    def test_unknown_query(self) -> None:
        """Test that an unknown template name raises KeyError."""
        with pytest.raises(KeyError):
            render_query("gists_query")


class TestEscapeValue:
    """Test escape_value function."""

    def test_escapes_backslash_before_quote(self) -> None:
        """Test that backslashes are escaped before quotes."""
        assert escape_value('a\\"b') == 'a\\\\\\"b'

    def test_plain_value_unchanged(self) -> None:
        """Test that plain values are unchanged."""
        assert escape_value("is:open") == "is:open"
