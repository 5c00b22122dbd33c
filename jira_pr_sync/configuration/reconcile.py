"""Reconciles configuration between action inputs and the runner environment."""

from urllib.parse import urlparse

from jira_pr_sync.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from jira_pr_sync.configuration.models import IssueKeyLocation, SyncConfig
from jira_pr_sync.utils.helpers import split_repository_in_configuration


def require(value: str | None, name: str, cli_name: str, env_name: str) -> str:
    """Return a required configuration value, raising if it is missing or blank."""
    if value is None or not value.strip():
        raise RequiredConfigurationElementError(name=name, cli_name=cli_name, env_name=env_name)
    return value.strip()


async def normalize_jira_base_url(jira_base_url: str) -> str:
    """Validate the Jira base URL and strip any trailing slash.

    Raises:
        InvalidConfigurationElementError: If the URL is not an absolute http(s) URL.
    """
    parsed = urlparse(jira_base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidConfigurationElementError("jira-base-url", jira_base_url, "expected an absolute http(s) URL such as https://example.atlassian.net")
    return jira_base_url.rstrip("/")


async def parse_issue_key_location(issue_key_location: str | None) -> IssueKeyLocation:
    """Parse the issue-key-location input, defaulting to searching both title and branch.

    Raises:
        InvalidConfigurationElementError: If the value is not one of branch, title or both.
    """
    if issue_key_location is None or not issue_key_location.strip():
        return IssueKeyLocation.BOTH
    try:
        return IssueKeyLocation(issue_key_location.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(location.value for location in IssueKeyLocation)
        raise InvalidConfigurationElementError("issue-key-location", issue_key_location, f"expected one of: {allowed}") from exc


async def reconcile_sync_configuration(
    cli_github_token: str | None,
    cli_github_api_url: str,
    cli_repo: str | None,
    cli_jira_username: str | None,
    cli_jira_api_token: str | None,
    cli_jira_base_url: str | None,
    cli_issue_key_location: str | None,
    cli_inject_jira_info_table: bool,
    cli_sync_issue_type: bool,
    cli_sync_issue_priority: bool,
    cli_sync_issue_labels: bool,
    cli_sync_issue_fix_versions: bool,
    cli_run_timeout: float,
) -> SyncConfig:
    """Reconciles the configuration for a jira-pr-sync run.

    Raises:
        RequiredConfigurationElementError: If a required input is missing.
        InvalidConfigurationElementError: If an input has an unusable value.

    Returns:
        SyncConfig: The validated configuration.
    """
    github_token = require(cli_github_token, "GitHub token", "--github-token", "INPUT_GITHUB-TOKEN")
    jira_username = require(cli_jira_username, "Jira username", "--jira-username", "INPUT_JIRA-USERNAME")
    jira_api_token = require(cli_jira_api_token, "Jira API token", "--jira-api-token", "INPUT_JIRA-API-TOKEN")
    jira_base_url = require(cli_jira_base_url, "Jira base URL", "--jira-base-url", "INPUT_JIRA-BASE-URL")
    repo = require(cli_repo, "Repository", "--repo", "GITHUB_REPOSITORY")
    try:
        await split_repository_in_configuration(repo)
    except ValueError as exc:
        raise InvalidConfigurationElementError("repo", repo, "expected 'owner/repo'") from exc

    if cli_run_timeout <= 0:
        raise InvalidConfigurationElementError("run-timeout", cli_run_timeout, "expected a positive number of seconds")

    return SyncConfig(
        github_token=github_token,
        github_api_url=cli_github_api_url,
        repo=repo,
        jira_username=jira_username,
        jira_api_token=jira_api_token,
        jira_base_url=await normalize_jira_base_url(jira_base_url),
        issue_key_location=await parse_issue_key_location(cli_issue_key_location),
        inject_jira_info_table=cli_inject_jira_info_table,
        sync_issue_type=cli_sync_issue_type,
        sync_issue_priority=cli_sync_issue_priority,
        sync_issue_labels=cli_sync_issue_labels,
        sync_issue_fix_versions=cli_sync_issue_fix_versions,
        run_timeout=cli_run_timeout,
    )
