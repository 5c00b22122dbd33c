"""Shared constants used across the application."""

import re

# Issue Key Constants
# -------------------

# reference: https://confluence.atlassian.com/adminjiraserver/changing-the-project-key-format-938847081.html
JIRA_ISSUE_KEY_PATTERN = re.compile(r"([A-Z]+[A-Z0-9_]*-[0-9]+)")
"""Pattern to match Jira issue keys (e.g., ABC-123) in a PR title or branch name."""

# Jira API Constants
# ------------------

JIRA_API_VERSION = "2"
"""Version of the Jira REST API used to fetch issues."""

JIRA_ISSUE_FIELDS = ("summary", "issuetype", "priority", "labels", "fixVersions")
"""Jira fields requested when fetching an issue."""

# Pull Request Description Constants
# ----------------------------------

JIRA_INFO_MARKER_START = "<!-- jira-field-sync -- START -->"
"""Marker opening the machine-managed region of a PR description."""

JIRA_INFO_MARKER_END = "<!-- jira-field-sync -- END -->"
"""Marker closing the machine-managed region of a PR description."""

JIRA_INFO_MARKER_WARNING = (
    "<!-- ⚠️ please DO NOT remove this marker nor any of the ones below it, "
    "they are needed to replace info when the ticket title is updated -->"
)
"""Comment placed inside the managed region asking users not to edit it."""

JIRA_INFO_TEMPLATE_NAME = "jira_info_table.j2"
"""File name of the Jinja2 template rendering the Jira information table."""

# Run Constants
# -------------

DEFAULT_RUN_TIMEOUT_SECONDS = 300.0
"""Upper bound on a single run so that a hung request cannot block a pipeline."""

OUTPUT_LIST_SEPARATOR = ","
"""Separator used when publishing list values (labels, fix versions) as step outputs."""
