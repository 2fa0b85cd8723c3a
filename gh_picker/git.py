"""Local git repository helpers."""

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# git@github.com:owner/name.git, https://github.com/owner/name(.git), ssh://...
REMOTE_URL_PATTERN = re.compile(r"[:/]([\w.-]+)/([\w.-]+?)(?:\.git)?/?$")


def repo_from_remote_url(url: str) -> str | None:
    """Extract 'owner/name' from a git remote URL.

    Example:
        >>> repo_from_remote_url("git@github.com:octo-org/hello.git")
        'octo-org/hello'
    """
    match = REMOTE_URL_PATTERN.search(url.strip())
    if not match:
        return None
    return f"{match.group(1)}/{match.group(2)}"


def get_remote_name(
    remote: str = "origin", cwd: str | Path | None = None
) -> str | None:
    """Resolve the GitHub repository of the current git checkout.

    Args:
        remote: Remote name to inspect
        cwd: Directory inside the checkout; defaults to the working directory

    Returns:
        Repository as owner/name, or None when it cannot be determined
    """
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", remote],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
            cwd=cwd,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"git remote lookup failed: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"git remote get-url {remote}: {result.stderr.strip()}")
        return None

    return repo_from_remote_url(result.stdout)


def split_repo(repo: str) -> tuple[str, str]:
    """Split 'owner/name' into its parts.

    Raises:
        ValueError: If the value is not of the form owner/name
    """
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise ValueError(f"Invalid repository '{repo}'. Expected format: owner/name")
    return owner, name


def checkout_pull_request(number: int, remote: str = "origin") -> str | None:
    """Fetch a pull request head into a local branch and check it out.

    Returns:
        None on success, otherwise the git error output
    """
    branch = f"pr/{number}"
    commands = [
        ["git", "fetch", remote, f"pull/{number}/head:{branch}"],
        ["git", "checkout", branch],
    ]
    for command in commands:
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, check=False, timeout=120
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            return f"{' '.join(command)} failed: {e}"
        if result.returncode != 0:
            return result.stderr.strip() or f"{' '.join(command)} failed"
    return None
