"""Contains synchronization logic for the categories of labels mirrored from Jira.

Each category owns every pull request label that starts with its prefix.
Syncing a category re-reads the pull request's labels, diffs them against the
values taken from the Jira issue, and issues only the removals and additions
needed to bring that category in line. Labels of other categories are never
touched, so categories can be synced in any order or concurrently.
"""

import asyncio
from enum import Enum

import structlog

from jira_pr_sync.actions import commands
from jira_pr_sync.github.abc import PullRequestHostBase
from jira_pr_sync.jira.models import IssueSnapshot
from jira_pr_sync.synchronize.exceptions import MissingFieldError
from jira_pr_sync.synchronize.labels import compute_label_diff
from jira_pr_sync.synchronize.results import LabelSyncResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class LabelCategory(str, Enum):
    """Categories of synced labels; each value is the label prefix."""

    ISSUE_TYPE = "Issue Type"
    PRIORITY = "Priority"
    JIRA_LABEL = "Jira Label"
    RELEASE = "Release"


def desired_label_values(category: LabelCategory, snapshot: IssueSnapshot) -> list[str]:
    """Derive the label values a category should carry from the Jira issue.

    Raises:
        MissingFieldError: If the issue has no issue type or priority and that
            category is being synced.
    """
    if category == LabelCategory.ISSUE_TYPE:
        if not snapshot.issue_type_name:
            raise MissingFieldError(snapshot.key, "issue type")
        return [snapshot.issue_type_name]
    if category == LabelCategory.PRIORITY:
        if not snapshot.priority_name:
            raise MissingFieldError(snapshot.key, "priority")
        return [snapshot.priority_name]
    if category == LabelCategory.JIRA_LABEL:
        return list(snapshot.labels)
    return snapshot.fix_version_names


async def remove_labels(github_adapter: PullRequestHostBase, pull_request_number: int, labels: list[str]) -> dict[str, Exception]:
    """Remove labels one request at a time, concurrently.

    GitHub has no bulk removal endpoint. A failed removal does not cancel the
    others; failures are returned keyed by label name.
    """
    results = await asyncio.gather(
        *(github_adapter.remove_label(pull_request_number, label) for label in labels),
        return_exceptions=True,
    )
    failures: dict[str, Exception] = {}
    for label, result in zip(labels, results):
        if isinstance(result, Exception):
            failures[label] = result
        elif isinstance(result, BaseException):
            raise result
    return failures


async def sync_labels(prefix: str, desired_values: list[str], github_adapter: PullRequestHostBase, pull_request_number: int) -> LabelSyncResult:
    """Take care of syncing labels of a certain type (aka: prefix).

    Also removes labels of that type that are no longer wanted.

    Raises:
        PlatformRequestError: If reading the pull request or adding labels fails.
    """
    logger.debug("Processing labels of type", prefix=prefix, desired_values=desired_values)
    pull_request = await github_adapter.get_pull_request_state(pull_request_number)
    diff = compute_label_diff(prefix, desired_values, pull_request.label_names)
    if diff.is_empty:
        logger.info("Labels are up to date", prefix=prefix, pull_request_number=pull_request_number)
        return LabelSyncResult(prefix=prefix, additions=[], removals=[])

    removals = sorted(diff.to_remove)
    additions = sorted(diff.to_add)

    failed_removals: dict[str, Exception] = {}
    if removals:
        logger.info("Removing labels from pull request", prefix=prefix, pull_request_number=pull_request_number, labels=removals)
        failed_removals = await remove_labels(github_adapter, pull_request_number, removals)
        if failed_removals:
            details = ", ".join(f"{label} ({error})" for label, error in failed_removals.items())
            logger.warning("Failed to remove some labels", prefix=prefix, pull_request_number=pull_request_number, failures=details)
            commands.warning(f"Failed to remove {len(failed_removals)} label(s) of type '{prefix}': {details}")

    if additions:
        logger.info("Adding labels to pull request", prefix=prefix, pull_request_number=pull_request_number, labels=additions)
        await github_adapter.add_labels(pull_request_number, additions)

    return LabelSyncResult(prefix=prefix, additions=additions, removals=removals, failed_removals=failed_removals)


async def sync_label_category(
    category: LabelCategory, snapshot: IssueSnapshot, github_adapter: PullRequestHostBase, pull_request_number: int
) -> LabelSyncResult:
    """Sync one category of labels on a pull request with the Jira issue."""
    desired_values = desired_label_values(category, snapshot)
    return await sync_labels(category.value, desired_values, github_adapter, pull_request_number)
