"""General utility functions and helper classes."""

import structlog

from jira_pr_sync.configuration.models import IssueKeyLocation
from jira_pr_sync.synchronize.exceptions import ExtractionError
from jira_pr_sync.utils.constants import JIRA_ISSUE_KEY_PATTERN

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def find_issue_key(text: str | None) -> str | None:
    """Return the first Jira issue key found in text, if any."""
    if not text:
        return None
    match = JIRA_ISSUE_KEY_PATTERN.search(text)
    if match is None:
        return None
    return match.group(1)


def extract_issue_key(location: IssueKeyLocation, title: str | None, branch_name: str | None) -> str:
    """Extract the Jira issue key from the pull request title and/or branch name.

    When searching both, the title takes precedence over the branch name.

    Raises:
        ExtractionError: If no issue key is found in the configured location.
    """
    if location == IssueKeyLocation.TITLE:
        issue_key = find_issue_key(title)
    elif location == IssueKeyLocation.BRANCH:
        issue_key = find_issue_key(branch_name)
    else:
        issue_key = find_issue_key(title) or find_issue_key(branch_name)

    logger.debug("Searched pull request for Jira issue key", location=location.value, title=title, branch_name=branch_name, issue_key=issue_key)
    if issue_key is None:
        raise ExtractionError(location.value)
    return issue_key


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("Repository is required - set GITHUB_REPOSITORY to the 'owner/repo' of the pull request.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository
