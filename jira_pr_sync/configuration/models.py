"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum


class IssueKeyLocation(str, Enum):
    """Enum for where in a pull request the Jira issue key is searched for."""

    BRANCH = "branch"
    TITLE = "title"
    BOTH = "both"


@dataclass
class SyncConfig:
    """Reconciled configuration for a single jira-pr-sync run."""

    github_token: str
    github_api_url: str
    repo: str
    jira_username: str
    jira_api_token: str
    jira_base_url: str
    issue_key_location: IssueKeyLocation
    inject_jira_info_table: bool
    sync_issue_type: bool
    sync_issue_priority: bool
    sync_issue_labels: bool
    sync_issue_fix_versions: bool
    run_timeout: float
