"""Contains unit tests for the synchronize driver."""

import asyncio
from dataclasses import replace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from jira_pr_sync.actions.context import PullRequestContext
from jira_pr_sync.configuration.models import IssueKeyLocation, SyncConfig
from jira_pr_sync.github.exceptions import PlatformRequestError
from jira_pr_sync.jira.client import JiraClient
from jira_pr_sync.jira.exceptions import JiraRequestError
from jira_pr_sync.jira.models import IssueSnapshot
from jira_pr_sync.synchronize.categories import LabelCategory
from jira_pr_sync.synchronize.driver import (
    DESCRIPTION_OPERATION,
    build_outputs,
    enabled_label_categories,
    run_jira_sync_workflow,
)
from jira_pr_sync.synchronize.exceptions import ExtractionError, MissingFieldError, OperationsFailedError, RunTimeoutError
from jira_pr_sync.utils.constants import JIRA_INFO_MARKER_START


@pytest.fixture
def sync_config() -> SyncConfig:
    """Configuration with every sync operation enabled."""
    return SyncConfig(
        github_token="ghs_token",
        github_api_url="https://api.github.com",
        repo="octocat/Hello-World",
        jira_username="bot@example.com",
        jira_api_token="jira-token",
        jira_base_url="https://example.atlassian.net",
        issue_key_location=IssueKeyLocation.BOTH,
        inject_jira_info_table=True,
        sync_issue_type=True,
        sync_issue_priority=True,
        sync_issue_labels=True,
        sync_issue_fix_versions=True,
        run_timeout=30.0,
    )


@pytest.fixture
def pull_request() -> PullRequestContext:
    """A pull request whose title references ABC-123."""
    return PullRequestContext(number=7, title="ABC-123: fix login button", branch_name="feature/ABC-123-login")


def make_jira_client(snapshot: IssueSnapshot | None = None, error: Exception | None = None) -> MagicMock:
    """Create a mock Jira client returning a snapshot or raising an error."""
    jira_client = MagicMock(spec=JiraClient)
    jira_client.find_issue = AsyncMock(return_value=snapshot, side_effect=error)
    return jira_client


def test_enabled_label_categories(sync_config: SyncConfig) -> None:
    """Test that only toggled-on categories are synced."""
    config = replace(sync_config, sync_issue_priority=False, sync_issue_labels=False)
    assert enabled_label_categories(config) == [LabelCategory.ISSUE_TYPE, LabelCategory.RELEASE]


def test_build_outputs(issue_snapshot: IssueSnapshot) -> None:
    """Test the step outputs published for a fully populated issue."""
    assert build_outputs("ABC-123", issue_snapshot) == {
        "issue-key": "ABC-123",
        "issue-type": "Bug",
        "issue-priority": "High",
        "issue-labels": "backend,login",
        "issue-fix-versions": "1.2.0,1.3.0",
    }


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_syncs_everything(
    sync_config: SyncConfig,
    pull_request: PullRequestContext,
    issue_snapshot: IssueSnapshot,
    fake_pull_request_host: Any,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Test a run that applies every label category and the description block."""
    fake_pull_request_host.labels = ["Priority: Low", "Release: 0.9", "needs review"]
    fake_pull_request_host.body = "## Summary"
    jira_client = make_jira_client(issue_snapshot)

    result = await run_jira_sync_workflow(sync_config, pull_request, github_adapter=fake_pull_request_host, jira_client=jira_client)

    jira_client.find_issue.assert_awaited_once_with("ABC-123")
    assert result.issue_key == "ABC-123"
    assert result.errors == {}
    assert {r.operation for r in result.operation_results} == {category.value for category in LabelCategory} | {DESCRIPTION_OPERATION}
    assert sorted(fake_pull_request_host.labels) == [
        "Issue Type: Bug",
        "Jira Label: backend",
        "Jira Label: login",
        "Priority: High",
        "Release: 1.2.0",
        "Release: 1.3.0",
        "needs review",
    ]
    assert fake_pull_request_host.body.startswith(JIRA_INFO_MARKER_START)
    assert fake_pull_request_host.body.endswith("\n## Summary")
    # One fresh read per label category plus one for the description.
    assert fake_pull_request_host.reads == 5
    assert "::debug::Found Jira issue key ABC-123 in pull request #7" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_respects_toggles(
    sync_config: SyncConfig, pull_request: PullRequestContext, issue_snapshot: IssueSnapshot, fake_pull_request_host: Any
) -> None:
    """Test that disabled operations make no changes."""
    config = replace(sync_config, inject_jira_info_table=False, sync_issue_labels=False, sync_issue_fix_versions=False)
    result = await run_jira_sync_workflow(config, pull_request, github_adapter=fake_pull_request_host, jira_client=make_jira_client(issue_snapshot))

    assert [r.operation for r in result.operation_results] == ["Issue Type", "Priority"]
    assert sorted(fake_pull_request_host.labels) == ["Issue Type: Bug", "Priority: High"]
    assert fake_pull_request_host.body_updates == []


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_isolates_failed_operations(
    sync_config: SyncConfig, pull_request: PullRequestContext, jira_payload: dict[str, Any], fake_pull_request_host: Any
) -> None:
    """Test that a missing priority fails only its own category while the others are applied."""
    jira_payload["fields"]["priority"] = None
    snapshot = IssueSnapshot.from_jira_payload(jira_payload)

    with pytest.raises(OperationsFailedError) as exc_info:
        await run_jira_sync_workflow(sync_config, pull_request, github_adapter=fake_pull_request_host, jira_client=make_jira_client(snapshot))

    assert list(exc_info.value.failures) == ["Priority"]
    assert isinstance(exc_info.value.failures["Priority"], MissingFieldError)
    assert "Issue Type: Bug" in fake_pull_request_host.labels
    assert "Release: 1.2.0" in fake_pull_request_host.labels
    assert fake_pull_request_host.body.startswith(JIRA_INFO_MARKER_START)


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_reports_every_failure(
    sync_config: SyncConfig, pull_request: PullRequestContext, issue_snapshot: IssueSnapshot, fake_pull_request_host: Any
) -> None:
    """Test that addition and description failures are all reported together."""
    fake_pull_request_host.add_error = PlatformRequestError("add_labels", 7, "Validation Failed", 422)
    fake_pull_request_host.update_error = PlatformRequestError("update_pull_request_body", 7, "Validation Failed", 422)

    with pytest.raises(OperationsFailedError) as exc_info:
        await run_jira_sync_workflow(sync_config, pull_request, github_adapter=fake_pull_request_host, jira_client=make_jira_client(issue_snapshot))

    assert set(exc_info.value.failures) == {category.value for category in LabelCategory} | {DESCRIPTION_OPERATION}
    assert str(exc_info.value).startswith("5 sync operation(s) failed")


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_without_issue_key(sync_config: SyncConfig, fake_pull_request_host: Any) -> None:
    """Test that a pull request without an issue key fails before Jira is queried."""
    jira_client = make_jira_client()
    pull_request = PullRequestContext(number=7, title="fix login button", branch_name="feature/login")

    with pytest.raises(ExtractionError, match="No Jira issue key was found in: both"):
        await run_jira_sync_workflow(sync_config, pull_request, github_adapter=fake_pull_request_host, jira_client=jira_client)

    jira_client.find_issue.assert_not_awaited()
    assert fake_pull_request_host.reads == 0


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_jira_failure_makes_no_changes(
    sync_config: SyncConfig, pull_request: PullRequestContext, fake_pull_request_host: Any
) -> None:
    """Test that a failed Jira fetch stops the run before the pull request is touched."""
    jira_client = make_jira_client(error=JiraRequestError("ABC-123", "Jira issue ABC-123 was not found", 404))

    with pytest.raises(JiraRequestError):
        await run_jira_sync_workflow(sync_config, pull_request, github_adapter=fake_pull_request_host, jira_client=jira_client)

    assert fake_pull_request_host.reads == 0


@pytest.mark.asyncio
async def test_run_jira_sync_workflow_times_out(sync_config: SyncConfig, pull_request: PullRequestContext, fake_pull_request_host: Any) -> None:
    """Test that a hung request is cut off by the run timeout."""

    async def hang(issue_key: str) -> IssueSnapshot:
        await asyncio.sleep(10)
        raise AssertionError("should have timed out")

    jira_client = MagicMock(spec=JiraClient)
    jira_client.find_issue = hang
    config = replace(sync_config, run_timeout=0.01)

    with pytest.raises(RunTimeoutError, match="0.01 seconds"):
        await run_jira_sync_workflow(config, pull_request, github_adapter=fake_pull_request_host, jira_client=jira_client)
