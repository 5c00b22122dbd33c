"""Orchestrates the synchronization of a Jira issue onto a pull request."""

import asyncio
import time
from typing import Awaitable

import structlog
from structlog.contextvars import bound_contextvars

from jira_pr_sync.actions import commands
from jira_pr_sync.actions.context import PullRequestContext
from jira_pr_sync.configuration.models import SyncConfig
from jira_pr_sync.github.abc import PullRequestHostBase
from jira_pr_sync.github.adapter import GitHubKitAdapter
from jira_pr_sync.jira.client import JiraClient
from jira_pr_sync.jira.models import IssueSnapshot
from jira_pr_sync.synchronize.categories import LabelCategory, sync_label_category
from jira_pr_sync.synchronize.description import sync_pull_request_description
from jira_pr_sync.synchronize.exceptions import OperationsFailedError, RunTimeoutError
from jira_pr_sync.synchronize.results import JiraSyncResult, LabelSyncResult, OperationResult
from jira_pr_sync.utils.constants import OUTPUT_LIST_SEPARATOR
from jira_pr_sync.utils.helpers import extract_issue_key

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DESCRIPTION_OPERATION = "Jira Info Table"
"""Name under which the description injection is reported."""


def enabled_label_categories(config: SyncConfig) -> list[LabelCategory]:
    """Return the label categories turned on in the configuration."""
    toggles = {
        LabelCategory.ISSUE_TYPE: config.sync_issue_type,
        LabelCategory.PRIORITY: config.sync_issue_priority,
        LabelCategory.JIRA_LABEL: config.sync_issue_labels,
        LabelCategory.RELEASE: config.sync_issue_fix_versions,
    }
    return [category for category, enabled in toggles.items() if enabled]


def build_outputs(issue_key: str, snapshot: IssueSnapshot) -> dict[str, str]:
    """Build the step outputs describing the synced Jira issue."""
    return {
        "issue-key": issue_key,
        "issue-type": snapshot.issue_type_name or "",
        "issue-priority": snapshot.priority_name or "",
        "issue-labels": OUTPUT_LIST_SEPARATOR.join(snapshot.labels),
        "issue-fix-versions": OUTPUT_LIST_SEPARATOR.join(snapshot.fix_version_names),
    }


async def run_operation(operation: str, awaitable: Awaitable[LabelSyncResult | str]) -> OperationResult:
    """Run a single sync operation, capturing its failure instead of raising it."""
    start_time = time.time()
    try:
        result = await awaitable
    except Exception as exc:
        logger.error("Sync operation failed", operation=operation, error=str(exc), error_type=type(exc).__name__)
        return OperationResult(operation, error=exc)
    logger.info("Sync operation completed", operation=operation, duration=round(time.time() - start_time, 2))
    if isinstance(result, LabelSyncResult):
        return OperationResult(operation, label_sync_result=result)
    return OperationResult(operation)


async def sync_pull_request_with_issue(
    config: SyncConfig,
    snapshot: IssueSnapshot,
    github_adapter: PullRequestHostBase,
    pull_request_number: int,
) -> list[OperationResult]:
    """Run every enabled sync operation for a pull request.

    The operations touch disjoint label prefixes and the description, so they
    run concurrently. A failing operation does not stop the others from
    writing their changes.
    """
    operations: dict[str, Awaitable[LabelSyncResult | str]] = {}
    for category in enabled_label_categories(config):
        operations[category.value] = sync_label_category(category, snapshot, github_adapter, pull_request_number)
    if config.inject_jira_info_table:
        operations[DESCRIPTION_OPERATION] = sync_pull_request_description(config.jira_base_url, snapshot, github_adapter, pull_request_number)

    if not operations:
        logger.warning("No sync operations are enabled, nothing will be changed on the pull request")
        return []

    logger.info("Running sync operations", operations=list(operations), pull_request_number=pull_request_number)
    return list(await asyncio.gather(*(run_operation(name, awaitable) for name, awaitable in operations.items())))


async def _run_jira_sync_workflow(
    config: SyncConfig,
    pull_request: PullRequestContext,
    github_adapter: PullRequestHostBase | None,
    jira_client: JiraClient | None,
) -> JiraSyncResult:
    issue_key = extract_issue_key(config.issue_key_location, pull_request.title, pull_request.branch_name)

    with bound_contextvars(issue_key=issue_key, pull_request_number=pull_request.number):
        logger.info("Found Jira issue key", location=config.issue_key_location.value)
        commands.debug(f"Found Jira issue key {issue_key} in pull request #{pull_request.number}")

        if jira_client is None:
            async with JiraClient.create(config.jira_base_url, config.jira_username, config.jira_api_token) as owned_jira_client:
                snapshot = await owned_jira_client.find_issue(issue_key)
        else:
            snapshot = await jira_client.find_issue(issue_key)

        if github_adapter is None:
            github_adapter = await GitHubKitAdapter.create(
                repo=config.repo,
                github_token=config.github_token,
                github_api_url=config.github_api_url,
            )

        start_time = time.time()
        operation_results = await sync_pull_request_with_issue(config, snapshot, github_adapter, pull_request.number)
        result = JiraSyncResult(issue_key, snapshot, operation_results)
        logger.info(
            "Processed pull request",
            duration=round(time.time() - start_time, 2),
            succeeded=[r.operation for r in operation_results if r.succeeded],
            failed=list(result.errors),
        )

    if result.errors:
        raise OperationsFailedError(result.errors)
    return result


async def run_jira_sync_workflow(
    config: SyncConfig,
    pull_request: PullRequestContext,
    github_adapter: PullRequestHostBase | None = None,
    jira_client: JiraClient | None = None,
) -> JiraSyncResult:
    """Run the jira-pr-sync workflow for one pull request.

    Extracts the issue key, fetches the Jira issue once, and runs the enabled
    label and description operations against that single snapshot. Clients
    are created from the configuration unless provided.

    Raises:
        ExtractionError: If no issue key is found in the pull request.
        JiraRequestError: If the Jira issue cannot be fetched.
        OperationsFailedError: If any sync operation failed; the others have
            still been applied.
        RunTimeoutError: If the run exceeds the configured timeout.
    """
    try:
        return await asyncio.wait_for(
            _run_jira_sync_workflow(config, pull_request, github_adapter, jira_client),
            timeout=config.run_timeout,
        )
    except asyncio.TimeoutError as exc:
        raise RunTimeoutError(config.run_timeout) from exc
