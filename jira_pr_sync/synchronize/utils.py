"""Contains utility functions for synchronization actions."""

from typing import Sequence

from jira_pr_sync.github.models import PullRequestLabel
from jira_pr_sync.synchronize.types import LabelType


def extract_label_names(labels: Sequence[LabelType]) -> list[str]:
    """Extract label names from a list of GitHub label objects, strings, or dicts.

    Labels without a usable name are dropped.
    """
    names: list[str] = []
    for label in labels:
        resolved = PullRequestLabel.from_github(label)
        if resolved is not None:
            names.append(resolved.name)
    return names


def render_prefixed_label(prefix: str, value: str) -> str:
    """Render a label value under a category prefix, e.g. 'Priority: High'."""
    return f"{prefix}: {value}"


def label_has_prefix(label: str, prefix: str) -> bool:
    """Check whether a label belongs to a category, ignoring case."""
    return label.lower().startswith(prefix.lower())
