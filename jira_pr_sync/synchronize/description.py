"""Contains logic for keeping a Jira information block in a pull request description.

The block is bounded by start and end markers. Each run strips any existing
block and prepends a freshly rendered one, so repeated runs replace the block
rather than accumulating copies, and everything outside the markers is kept
as the author wrote it.
"""

import re

import structlog

from jira_pr_sync.github.abc import PullRequestHostBase
from jira_pr_sync.jira.models import IssueSnapshot
from jira_pr_sync.utils.constants import (
    JIRA_INFO_MARKER_END,
    JIRA_INFO_MARKER_START,
    JIRA_INFO_MARKER_WARNING,
    JIRA_INFO_TEMPLATE_NAME,
)
from jira_pr_sync.utils.templates import render_template

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# Non-greedy: a block spans from a start marker to the first end marker after it.
JIRA_INFO_BLOCK_PATTERN = re.compile(
    rf"{re.escape(JIRA_INFO_MARKER_START)}[\s\S]*?{re.escape(JIRA_INFO_MARKER_END)}(?:\r?\n)?",
    re.IGNORECASE,
)


def build_issue_url(jira_base_url: str, issue_key: str) -> str:
    """Build the browser URL of a Jira issue."""
    return f"{jira_base_url.rstrip('/')}/browse/{issue_key}"


def render_jira_info_block(jira_base_url: str, snapshot: IssueSnapshot) -> str:
    """Render the marked Jira information block for a pull request description."""
    table = render_template(
        JIRA_INFO_TEMPLATE_NAME,
        key=snapshot.key,
        summary=snapshot.summary,
        issue_url=build_issue_url(jira_base_url, snapshot.key),
        issue_type=snapshot.issue_type,
        priority=snapshot.priority,
    )
    return "\n".join(
        [
            JIRA_INFO_MARKER_START,
            JIRA_INFO_MARKER_WARNING,
            table,
            JIRA_INFO_MARKER_WARNING,
            JIRA_INFO_MARKER_END,
        ]
    )


def strip_jira_info_block(body: str | None) -> str:
    """Remove any Jira information block from a pull request description.

    Markers are matched case-insensitively. A body without a block is
    returned unchanged.
    """
    return JIRA_INFO_BLOCK_PATTERN.sub("", body or "")


def inject_jira_info_block(jira_base_url: str, snapshot: IssueSnapshot, current_body: str | None) -> str:
    """Return the description with a fresh Jira information block at the top."""
    clean_body = strip_jira_info_block(current_body)
    return f"{render_jira_info_block(jira_base_url, snapshot)}\n{clean_body}"


async def sync_pull_request_description(
    jira_base_url: str, snapshot: IssueSnapshot, github_adapter: PullRequestHostBase, pull_request_number: int
) -> str:
    """Write the Jira information block into the pull request description.

    Raises:
        PlatformRequestError: If the pull request cannot be read or updated.
    """
    pull_request = await github_adapter.get_pull_request_state(pull_request_number)
    new_body = inject_jira_info_block(jira_base_url, snapshot, pull_request.body)
    logger.debug("Rendered pull request description", pull_request_number=pull_request_number, clean_body=strip_jira_info_block(pull_request.body))

    if new_body == pull_request.body:
        logger.info("Pull request description is up to date", pull_request_number=pull_request_number, issue_key=snapshot.key)
        return new_body

    logger.info("Updating pull request description", pull_request_number=pull_request_number, issue_key=snapshot.key)
    await github_adapter.update_pull_request_body(pull_request_number, new_body)
    return new_body
