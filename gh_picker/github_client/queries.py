"""GraphQL query templates.

Templates use positional ``%s`` placeholders. Paginated queries declare an
``$endCursor`` variable and select ``pageInfo`` on the paginated connection.
"""

ISSUES_QUERY = """
query($endCursor: String) {
  repository(owner: "%s", name: "%s") {
    issues(first: 100, after: $endCursor, filterBy: {%s}, orderBy: {field: %s, direction: %s}) {
      totalCount
      nodes {
        __typename
        number
        title
        url
        state
        repository { nameWithOwner }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

PULL_REQUESTS_QUERY = """
query($endCursor: String) {
  repository(owner: "%s", name: "%s") {
    pullRequests(first: 100, after: $endCursor, %s orderBy: {field: %s, direction: %s}) {
      totalCount
      nodes {
        __typename
        number
        title
        url
        state
        isDraft
        headRefName
        baseRefName
        repository { nameWithOwner }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

SEARCH_QUERY = """
query {
  search(query: "%s", type: %s, first: 100) {
    nodes {
      __typename
      ... on Issue {
        number
        title
        url
        state
        repository { nameWithOwner }
      }
      ... on PullRequest {
        number
        title
        url
        state
        repository { nameWithOwner }
      }
      ... on Discussion {
        number
        title
        url
        category { name }
        repository { nameWithOwner }
      }
    }
  }
}
"""

QUERIES = {
    "issues_query": ISSUES_QUERY,
    "pull_requests_query": PULL_REQUESTS_QUERY,
    "search_query": SEARCH_QUERY,
}


def escape_value(value: str) -> str:
    """Escape a value for use inside a GraphQL string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def render_query(name: str, *values: object, escape: bool = True) -> str:
    """Render a named query template.

    Args:
        name: Template name, one of ``QUERIES``
        *values: Positional substitution values
        escape: Escape backslashes and double quotes in the values. Disable it
            when a value is itself GraphQL syntax (such as a filter expression).

    Returns:
        Query text ready to send

    Raises:
        KeyError: If no template has the given name
    """
    template = QUERIES[name]
    rendered = [escape_value(str(v)) if escape else str(v) for v in values]
    return template % tuple(rendered)
