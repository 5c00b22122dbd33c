"""Utility modules for shared functionality."""

from .constants import (
    JIRA_INFO_MARKER_END,
    JIRA_INFO_MARKER_START,
    JIRA_ISSUE_KEY_PATTERN,
)
from .retry import retry_on_rate_limit

__all__ = [
    "JIRA_ISSUE_KEY_PATTERN",
    "JIRA_INFO_MARKER_START",
    "JIRA_INFO_MARKER_END",
    "retry_on_rate_limit",
]
